"""Output file naming and writing."""

import os
from pathlib import Path

from llmforge.core.exceptions import PathError
from llmforge.models.transformer_config import InputType, TransformerConfig

DEFAULT_OUTPUT_STEM = "transformer_output"
DEFAULT_OUTPUT_FILE_NAME = f"{DEFAULT_OUTPUT_STEM}.txt"


def _prefix_dotfile(file_name: str) -> str:
    if file_name.startswith("."):
        return DEFAULT_OUTPUT_STEM + file_name
    return file_name


def get_output_file_name(config: TransformerConfig) -> str:
    """Derive the output file name of a configuration.

    A ``*`` is replaced by the extension-less base name of the first
    file-typed input, or ``transformer_output`` when there is none. An empty
    name becomes ``transformer_output.txt`` and a bare extension such as
    ``.md`` is prefixed with ``transformer_output``.
    """
    pattern = config.output_file_name

    if pattern and "*" in pattern:
        file_input = next((i for i in config.input if i.type == InputType.FILE), None)
        if file_input is not None and file_input.value:
            stem = Path(file_input.value).stem
            return pattern.replace("*", stem, 1)
        return _prefix_dotfile(pattern.replace("*", DEFAULT_OUTPUT_STEM, 1))

    if not pattern:
        return DEFAULT_OUTPUT_FILE_NAME

    return _prefix_dotfile(pattern)


def write_output(data: str, path: Path) -> Path:
    """Write an LLM response to ``path``.

    Raises:
        PathError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)
    except OSError as e:
        raise PathError(
            f"Failed to write output file {path}: {e}", context={"path": str(path)}
        ) from e
    return path


def ensure_output_folder(folder: str) -> Path:
    """Create the output folder if missing and return it."""
    path = Path(folder)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathError(
            f"Failed to create output folder {folder}: {e}", context={"path": folder}
        ) from e
    if not os.access(path, os.W_OK):
        raise PathError(f"Output folder is not writable: {folder}", context={"path": folder})
    return path
