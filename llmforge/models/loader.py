"""Transformer definition loader: YAML or JSON files describing one transformer."""

import uuid
from pathlib import Path
from typing import Dict

import yaml

from llmforge.core.exceptions import ValidationError
from llmforge.models.templates import render_templates
from llmforge.models.transformer_config import TransformerConfig


def load_transformer_file(path: str, cli_vars: Dict[str, str] | None = None) -> TransformerConfig:
    """
    Load a transformer definition from a YAML or JSON file.

    Template expressions (``{{ env_var('X') }}``, ``{{ var('X') }}``) are
    rendered before validation; prompt placeholders are left untouched. A
    definition without an ``id`` gets a fresh one.

    Args:
        path: Path to the definition file
        cli_vars: Variables passed via CLI (e.g., --vars key=value)

    Raises:
        ValidationError: If the file is missing, unparseable or invalid
        SettingsError: If a template variable is not defined
    """
    definition_path = Path(path)
    if not definition_path.exists():
        raise ValidationError(f"Transformer file not found: {path}")

    try:
        with open(definition_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(
            f"Invalid YAML in transformer file: {e}", context={"path": str(path)}
        ) from e

    if not isinstance(data, dict):
        raise ValidationError(
            "Transformer file must contain a dictionary", context={"path": str(path)}
        )

    prompt = data.pop("prompt", None)
    data = render_templates(data, cli_vars)
    if prompt is not None:
        data["prompt"] = prompt
    if not data.get("id"):
        data["id"] = str(uuid.uuid4())
    return TransformerConfig.from_dict(data)
