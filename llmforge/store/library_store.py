"""Library store protocol and implementations for persisting transformers and folders."""

import json
import logging
from pathlib import Path
from typing import Dict, Protocol

from llmforge.core.exceptions import StoreError, ValidationError
from llmforge.models.library import LibraryItem

logger = logging.getLogger(__name__)


class LibraryStore(Protocol):
    """Protocol for library persistence backends."""

    def load_all(self) -> Dict[str, LibraryItem]:
        """Load every library record keyed by id.

        Raises:
            StoreError: If loading fails
        """
        ...

    def save_all(self, items: Dict[str, LibraryItem]) -> None:
        """Replace the persisted library with ``items``.

        Raises:
            StoreError: If saving fails
        """
        ...

    def get_base_path(self) -> str:
        """Directory the store keeps its data in."""
        ...


class LocalLibraryStore:
    """Local file-based library store.

    Stores the library as a JSON array of ``{type, config}`` and
    ``{type, folder}`` records. Uses atomic writes (write to temp file, then
    rename) to prevent corruption.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def get_base_path(self) -> str:
        return str(self.path.parent)

    def load_all(self) -> Dict[str, LibraryItem]:
        """Load the library file.

        Returns:
            Records keyed by id (empty if the file doesn't exist). Malformed
            records are skipped with a warning.

        Raises:
            StoreError: If the file exists but cannot be read or parsed
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(
                f"Failed to parse library file {self.path}: {e}",
                context={"path": str(self.path)},
            ) from e
        except OSError as e:
            raise StoreError(
                f"Failed to read library file {self.path}: {e}",
                context={"path": str(self.path)},
            ) from e

        if not isinstance(data, list):
            raise StoreError(
                "Library file must contain a JSON array", context={"path": str(self.path)}
            )

        items: Dict[str, LibraryItem] = {}
        for index, record in enumerate(data):
            try:
                item = LibraryItem.from_dict(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid library record #{index}: {e}")
                continue
            items[item.id] = item
        return items

    def save_all(self, items: Dict[str, LibraryItem]) -> None:
        """Write the library file using an atomic replace.

        Raises:
            StoreError: If saving fails
        """
        temp_file = self.path.with_name(self.path.name + ".tmp")
        records = [item.to_dict() for item in items.values()]

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)

            temp_file.replace(self.path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StoreError(
                f"Failed to save library file {self.path}: {e}",
                context={"path": str(self.path)},
            ) from e


class InMemoryLibraryStore:
    """Library store kept in memory, for embedding and tests."""

    def __init__(self, items: Dict[str, LibraryItem] | None = None, base_path: str = "."):
        self._items: Dict[str, LibraryItem] = dict(items or {})
        self._base_path = base_path
        self.saves = 0

    def get_base_path(self) -> str:
        return self._base_path

    def load_all(self) -> Dict[str, LibraryItem]:
        return dict(self._items)

    def save_all(self, items: Dict[str, LibraryItem]) -> None:
        self._items = dict(items)
        self.saves += 1
