"""Transformer library manager: CRUD over transformers and folders."""

import logging
import uuid
from typing import Dict, List, Optional

from llmforge.core.exceptions import ExistsError, NotFoundError, ValidationError
from llmforge.core.placeholders import validate_prompt
from llmforge.core.reconciler import check_input_catalog, reconcile
from llmforge.core.resolver import resolve_prompt
from llmforge.models.library import LibraryFolder, LibraryItem
from llmforge.models.transformer_config import TransformerConfig
from llmforge.store.library_store import LibraryStore

logger = logging.getLogger(__name__)


def validate_transformer_config(config: TransformerConfig) -> None:
    """Check the fields a stored transformer must carry.

    Raises:
        ValidationError: On the first invalid field
    """
    context = {"id": config.id}
    if not config.id or not config.id.strip():
        raise ValidationError("Transformer ID is required")
    if not config.name or not config.name.strip():
        raise ValidationError("Transformer name is required", context=context)
    if not config.description or not config.description.strip():
        raise ValidationError("Transformer description is required", context=context)
    if not config.prompt or not config.prompt.strip():
        raise ValidationError("Transformer prompt is required", context=context)

    validate_prompt(config.prompt)

    if config.temperature < 0:
        raise ValidationError(
            "Temperature must be greater than or equal to 0", context=context
        )
    if config.temperature > 2:
        raise ValidationError("Temperature must be less than or equal to 2", context=context)

    if not config.input:
        raise ValidationError("At least one input is required", context=context)
    for config_input in config.input:
        if not config_input.name or not config_input.name.strip():
            raise ValidationError("Input name is required and cannot be empty", context=context)


def preview_transformer(config: TransformerConfig, workspace_root: Optional[str] = None) -> str:
    """Return the prompt that would be sent to the LLM, without calling it.

    A folder input is shown as its raw path unless the transformer joins
    files; it must exist either way.

    Raises:
        ValidationError: If the prompt is invalid
        InputNotFoundError: If a placeholder has no input
        PathError: If a file input cannot be read or a folder input does
            not exist
    """
    validate_prompt(config.prompt)
    return resolve_prompt(config, workspace_root)


class TransformerManager:
    """Manages the transformer and folder records of a library store.

    Every mutation is persisted immediately.
    """

    def __init__(self, store: LibraryStore):
        self.store = store
        self._items: Dict[str, LibraryItem] = store.load_all()
        logger.debug(f"Loaded {len(self._items)} library items")

    def _save(self) -> None:
        self.store.save_all(self._items)

    def reload(self) -> None:
        self._items = self.store.load_all()

    # Transformers

    def create_transformer(self, config: TransformerConfig) -> TransformerConfig:
        """Add a new transformer.

        Raises:
            ExistsError: If the id is already taken
            ValidationError: If the configuration is invalid or its inputs do
                not match the prompt placeholders
        """
        if config.id in self._items:
            raise ExistsError(
                f"Transformer already exists: {config.name}", context={"id": config.id}
            )
        validate_transformer_config(config)
        check_input_catalog(config)
        self._check_parent(config.parent_folder_id)

        self._items[config.id] = LibraryItem.for_transformer(config)
        self._save()
        logger.info(f"Created transformer {config.name}")
        return config

    def update_transformer(self, config: TransformerConfig) -> TransformerConfig:
        """Replace an existing transformer, reconciling its inputs with its prompt.

        Returns:
            The stored, reconciled configuration

        Raises:
            NotFoundError: If no transformer has this id
            ValidationError: If the configuration is invalid
        """
        if not config.id:
            raise ValidationError("Transformer ID is required")
        existing = self._items.get(config.id)
        if existing is None or existing.type != "transformer":
            raise NotFoundError(f"Transformer not found: {config.id}", context={"id": config.id})

        validate_transformer_config(config)
        updated = reconcile(config)
        self._check_parent(updated.parent_folder_id)

        self._items[updated.id] = LibraryItem.for_transformer(updated)
        self._save()
        logger.info(f"Updated transformer {updated.name}")
        return updated

    def delete_transformer(self, item_id: str) -> None:
        """Delete a transformer or a folder. Folders take their descendants with them.

        Raises:
            NotFoundError: If no record has this id
        """
        if item_id not in self._items:
            raise NotFoundError(f"Item not found: {item_id}", context={"id": item_id})

        for descendant in self._descendants(item_id):
            del self._items[descendant]
        del self._items[item_id]
        self._save()

    def get_transformer(self, id_or_name: str) -> Optional[TransformerConfig]:
        """Look a transformer up by id, falling back to its name."""
        item = self._items.get(id_or_name)
        if item is not None and item.type == "transformer":
            return item.config
        return next(
            (config for config in self.list_transformers() if config.name == id_or_name),
            None,
        )

    def require_transformer(self, id_or_name: str) -> TransformerConfig:
        """Like get_transformer, but raises NotFoundError when missing."""
        config = self.get_transformer(id_or_name)
        if config is None:
            raise NotFoundError(f"Transformer not found: {id_or_name}")
        return config

    def list_transformers(self) -> List[TransformerConfig]:
        return [item.config for item in self._items.values() if item.type == "transformer"]

    def list_items(self) -> List[LibraryItem]:
        return list(self._items.values())

    def children(self, parent_folder_id: Optional[str]) -> List[LibraryItem]:
        """Items directly under a folder (or at the top level for None), folders first."""
        items = [i for i in self._items.values() if i.parent_folder_id == parent_folder_id]
        return sorted(items, key=lambda i: (i.type != "folder", i.name.lower()))

    def search_transformers(self, query: str) -> List[TransformerConfig]:
        """Case-insensitive match on name or description."""
        needle = query.lower()
        return [
            config
            for config in self.list_transformers()
            if needle in config.name.lower() or needle in config.description.lower()
        ]

    def duplicate_transformer(self, id_or_name: str) -> TransformerConfig:
        """Store a copy of a transformer under a fresh id.

        Raises:
            NotFoundError: If the transformer does not exist
        """
        original = self.require_transformer(id_or_name)
        copy = original.model_copy(
            update={"id": str(uuid.uuid4()), "name": f"{original.name} (Copy)"}
        )
        return self.create_transformer(copy)

    # Folders

    def create_folder(self, folder: LibraryFolder) -> LibraryFolder:
        """Add a folder.

        Raises:
            ValidationError: If id or name is blank, or the parent is not a folder
            ExistsError: If the id is already taken
        """
        if not folder.id or not folder.name or not folder.name.strip():
            raise ValidationError("Folder ID and name are required")
        if folder.id in self._items:
            raise ExistsError(f"Folder already exists: {folder.name}", context={"id": folder.id})
        self._check_parent(folder.parent_folder_id)

        self._items[folder.id] = LibraryItem.for_folder(folder)
        self._save()
        return folder

    def rename_folder(self, folder_id: str, new_name: str) -> LibraryFolder:
        """Rename a folder.

        Raises:
            ValidationError: If the new name is blank
            NotFoundError: If the folder does not exist
        """
        if not new_name or not new_name.strip():
            raise ValidationError("New folder name is required and cannot be empty")
        item = self._items.get(folder_id)
        if item is None or item.type != "folder":
            raise NotFoundError(f"Folder not found: {folder_id}", context={"id": folder_id})

        renamed = item.folder.model_copy(update={"name": new_name.strip()})
        self._items[folder_id] = LibraryItem.for_folder(renamed)
        self._save()
        return renamed

    def move_item(self, item_id: str, parent_folder_id: Optional[str]) -> LibraryItem:
        """Place a transformer or folder under another folder, or at the top level.

        Raises:
            NotFoundError: If the item does not exist
            ValidationError: If the target is not a folder, or a folder would
                be moved into itself or one of its descendants
        """
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError(f"Item not found: {item_id}", context={"id": item_id})
        self._check_parent(parent_folder_id)
        if parent_folder_id is not None and (
            parent_folder_id == item_id or parent_folder_id in self._descendants(item_id)
        ):
            raise ValidationError(
                "A folder cannot be moved into itself", context={"id": item_id}
            )

        if item.type == "transformer":
            moved = LibraryItem.for_transformer(
                item.config.model_copy(update={"parent_folder_id": parent_folder_id})
            )
        else:
            moved = LibraryItem.for_folder(
                item.folder.model_copy(update={"parent_folder_id": parent_folder_id})
            )
        self._items[item_id] = moved
        self._save()
        return moved

    def _check_parent(self, parent_folder_id: Optional[str]) -> None:
        if parent_folder_id is None:
            return
        parent = self._items.get(parent_folder_id)
        if parent is None or parent.type != "folder":
            raise ValidationError(
                f"Parent folder not found: {parent_folder_id}",
                context={"parent_folder_id": parent_folder_id},
            )

    def _descendants(self, folder_id: str) -> List[str]:
        found: List[str] = []
        pending = [folder_id]
        while pending:
            current = pending.pop()
            for item in self._items.values():
                if item.parent_folder_id == current and item.id not in found:
                    found.append(item.id)
                    if item.type == "folder":
                        pending.append(item.id)
        return found
