"""Keeps a configuration's inputs in sync with the placeholders of its prompt."""

from collections import Counter
from typing import List

from llmforge.core.exceptions import ValidationError
from llmforge.core.placeholders import Placeholder, parse_placeholders
from llmforge.models.transformer_config import Input, InputType, TransformerConfig


def _new_input(placeholder: Placeholder) -> Input:
    return Input(
        name=placeholder.name,
        description=f"Input for {placeholder.name}",
        type=InputType(placeholder.type),
        value="",
        required=True,
        options=placeholder.options,
    )


def reconcile(config: TransformerConfig) -> TransformerConfig:
    """Return a copy of ``config`` whose inputs match its prompt placeholders.

    Inputs matching a placeholder by name and type are kept with their values,
    missing ones are created empty, and inputs without a placeholder are
    dropped. The result is ordered by first appearance in the prompt.

    Raises:
        ValidationError: If the prompt itself is invalid
    """
    placeholders = parse_placeholders(config.prompt)

    new_inputs: List[Input] = []
    for placeholder in placeholders:
        existing = next(
            (
                i
                for i in config.input
                if i.name == placeholder.name and i.type.value == placeholder.type
            ),
            None,
        )
        new_inputs.append(existing if existing is not None else _new_input(placeholder))

    return config.with_inputs(new_inputs)


def check_input_catalog(config: TransformerConfig) -> None:
    """Validate that inputs and placeholders correspond one to one.

    Raises:
        ValidationError: If a placeholder has no input, an input has no
            placeholder, or an input name is declared twice
    """
    placeholders = parse_placeholders(config.prompt)
    expected = {(p.name, p.type) for p in placeholders}
    declared = [(i.name, i.type.value) for i in config.input]

    counts = Counter(name for name, _ in declared)
    duplicates = sorted(name for name, count in counts.items() if count > 1)
    missing = sorted(f"{n}::{t}" for n, t in expected - set(declared))
    orphans = sorted(f"{n}::{t}" for n, t in set(declared) - expected)

    if duplicates or missing or orphans:
        raise ValidationError(
            "Inputs do not match prompt placeholders",
            context={
                "transformer": config.name,
                "missing": missing,
                "orphans": orphans,
                "duplicates": duplicates,
            },
        )
