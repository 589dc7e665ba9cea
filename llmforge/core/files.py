"""Path resolution and file reading for transformer inputs."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

import docx

from llmforge.core.exceptions import InvalidPathError, PathError

logger = logging.getLogger(__name__)

DOCX_EXTENSION = ".docx"


def get_absolute_path(path: str, workspace_root: Optional[str] = None) -> Optional[str]:
    """Resolve ``path`` against the workspace root.

    Absolute paths are returned as given. Relative paths are joined to
    ``workspace_root``; without a root they cannot be resolved and None is
    returned.
    """
    if not path:
        return None
    expanded = os.path.expanduser(path)
    if os.path.isabs(expanded):
        return expanded
    if not workspace_root:
        return None
    return os.path.join(workspace_root, expanded)


def is_valid_file_path(path: str, workspace_root: Optional[str] = None) -> bool:
    absolute_path = get_absolute_path(path, workspace_root)
    return bool(absolute_path) and os.path.isfile(absolute_path)


def is_valid_folder_path(path: str, workspace_root: Optional[str] = None) -> bool:
    absolute_path = get_absolute_path(path, workspace_root)
    return bool(absolute_path) and os.path.isdir(absolute_path)


def has_read_write_access(path: str, workspace_root: Optional[str] = None) -> bool:
    absolute_path = get_absolute_path(path, workspace_root)
    if not absolute_path:
        return False
    return os.access(absolute_path, os.R_OK | os.W_OK)


def has_files(folder: str, workspace_root: Optional[str] = None) -> bool:
    """Return True if the folder has at least one entry."""
    absolute_path = get_absolute_path(folder, workspace_root)
    if not absolute_path:
        return False
    try:
        with os.scandir(absolute_path) as entries:
            return any(True for _ in entries)
    except OSError:
        return False


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def extract_docx_text(path: str | Path) -> str:
    """Extract the plain text of a Word document, one paragraph per line."""
    document = docx.Document(str(path))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def read_file_contents(path: str, workspace_root: Optional[str] = None) -> str:
    """Read a transformer input file as text.

    ``.docx`` documents are converted to plain text; every other file is read
    as UTF-8, with undecodable bytes replaced by U+FFFD.

    Raises:
        InvalidPathError: If the path cannot be resolved or does not exist
        PathError: If the path is a directory or cannot be read
    """
    absolute_path = get_absolute_path(path, workspace_root)
    if not absolute_path:
        raise InvalidPathError(
            "Input file must either be an absolute path or be relative to the workspace root",
            context={"path": path},
        )
    if not os.path.exists(absolute_path):
        raise InvalidPathError(
            f"Input file does not exist: {path}", context={"path": absolute_path}
        )
    if os.path.isdir(absolute_path):
        raise PathError(
            f"Input is a directory, expected a file: {path}",
            context={"path": absolute_path},
        )

    try:
        if Path(absolute_path).suffix.lower() == DOCX_EXTENSION:
            return extract_docx_text(absolute_path)
        with open(absolute_path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except (OSError, ValueError) as e:
        raise PathError(
            f"Failed to read input file {path}: {e}", context={"path": absolute_path}
        ) from e


def resolve_folder(path: str, workspace_root: Optional[str] = None) -> Path:
    """Resolve a folder input value to an existing directory.

    Raises:
        InvalidPathError: If the path cannot be resolved or does not exist
        PathError: If the path is not a directory
    """
    absolute_path = get_absolute_path(path, workspace_root)
    if not absolute_path:
        raise InvalidPathError(
            "Input folder must either be an absolute path or be relative to the workspace root",
            context={"path": path},
        )
    folder = Path(absolute_path)
    if not folder.exists():
        raise InvalidPathError(
            f"Input folder does not exist: {path}", context={"path": absolute_path}
        )
    if not folder.is_dir():
        raise PathError(f"Input is not a directory: {path}", context={"path": absolute_path})
    return folder


def list_folder_files(folder: Path) -> List[Path]:
    """Return the non-hidden files directly inside ``folder``, sorted by name."""
    return sorted(
        entry for entry in folder.iterdir() if entry.is_file() and not is_hidden(entry)
    )


def walk_folder_files(folder: Path) -> Iterator[Path]:
    """Yield non-hidden files under ``folder`` recursively, in sorted order.

    Hidden entries are skipped; hidden directories are not descended into.
    """
    for entry in sorted(folder.iterdir()):
        if is_hidden(entry):
            logger.debug(f"Skipping hidden entry: {entry}")
            continue
        if entry.is_dir():
            yield from walk_folder_files(entry)
        elif entry.is_file():
            yield entry
