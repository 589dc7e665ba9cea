"""Import and export of ``.fuzor`` files.

A ``.fuzor`` file is a JSON array of transformer configurations using the
camelCase keys of the library format.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Tuple

from llmforge.core.exceptions import LLMForgeError, StoreError
from llmforge.models.transformer_config import PATH_INPUT_TYPES, TransformerConfig

logger = logging.getLogger(__name__)

FUZOR_EXTENSION = ".fuzor"
REDACTED_PATH = "/"


def redact_paths(config: TransformerConfig) -> TransformerConfig:
    """Replace file and folder input values and the output folder with ``/``."""
    inputs = [
        i.model_copy(update={"value": REDACTED_PATH}) if i.type in PATH_INPUT_TYPES else i
        for i in config.input
    ]
    return config.model_copy(update={"input": inputs, "output_folder": REDACTED_PATH})


def export_transformer(config: TransformerConfig, path: str | Path) -> Path:
    """Write ``config`` to a ``.fuzor`` file with local paths redacted.

    Raises:
        StoreError: If the file cannot be written
    """
    target = Path(path)
    if target.is_dir():
        target = target / f"{config.name}{FUZOR_EXTENSION}"

    payload = [redact_paths(config).to_dict()]
    try:
        with open(target, "w", encoding="utf-8") as f:
            f.write(json.dumps(payload, indent=4))
    except OSError as e:
        raise StoreError(
            f"Failed to export transformer {config.name}: {e}", context={"path": str(target)}
        ) from e

    logger.info(f"Exported transformer {config.name} to {target}")
    return target


def read_fuzor_file(path: str | Path) -> List[dict[str, Any]]:
    """Read the raw records of a ``.fuzor`` file.

    Raises:
        StoreError: If the file cannot be read or is not a JSON array
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StoreError(f"Failed to import transformers: {e}", context={"path": str(path)}) from e

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise StoreError(
            "A .fuzor file must contain a JSON array of transformers",
            context={"path": str(path)},
        )
    return data


def import_configs(manager, records: Iterable[Any]) -> Tuple[int, int]:
    """Create each record in the library, skipping the ones that fail.

    Args:
        manager: TransformerManager receiving the transformers
        records: Configuration dictionaries or TransformerConfig instances

    Returns:
        (imported, total)
    """
    imported = 0
    total = 0
    for record in records:
        total += 1
        if isinstance(record, TransformerConfig):
            name = record.name
        else:
            name = record.get("name") if isinstance(record, dict) else None
        try:
            config = (
                record
                if isinstance(record, TransformerConfig)
                else TransformerConfig.from_dict(record)
            )
            manager.create_transformer(config)
            imported += 1
        except LLMForgeError as e:
            logger.error(f"Failed to import transformer {name}: {e}")
    logger.info(f"Successfully imported {imported} of {total} transformers")
    return imported, total


def import_transformers(manager, path: str | Path) -> Tuple[int, int]:
    """Import every transformer of a ``.fuzor`` file.

    Returns:
        (imported, total)

    Raises:
        StoreError: If the file cannot be read
    """
    logger.info(f"Selected .fuzor file: {path}")
    return import_configs(manager, read_fuzor_file(path))
