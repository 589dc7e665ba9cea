"""Placeholder parsing for prompt templates.

A placeholder is a ``{{name::type::options}}`` token. ``type`` defaults to
``file`` and ``options`` (a bracketed JSON array, used by ``select`` inputs)
is optional.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from llmforge.core.exceptions import ValidationError

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
NAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")

VALID_TYPES = frozenset({"file", "folder", "string", "text", "textArea", "select", ""})
DEFAULT_TYPE = "file"


@dataclass(frozen=True)
class Placeholder:
    """One occurrence of a placeholder token in a prompt."""

    token: str
    name: str
    type: str
    options: Optional[str] = None


def iter_placeholders(prompt: str) -> Iterator[Placeholder]:
    """Yield placeholders in prompt order without validating them.

    Every call starts a fresh scan of ``prompt``.
    """
    for match in PLACEHOLDER_PATTERN.finditer(prompt or ""):
        parts = match.group(1).split("::", 2)
        name = parts[0]
        type_ = parts[1] if len(parts) > 1 and parts[1] else DEFAULT_TYPE
        options = parts[2] if len(parts) > 2 and parts[2] else None
        yield Placeholder(token=match.group(0), name=name, type=type_, options=options)


def parse_placeholders(prompt: str) -> List[Placeholder]:
    """Parse and validate all placeholders of a prompt.

    Args:
        prompt: Prompt template

    Returns:
        Placeholders in order of first appearance

    Raises:
        ValidationError: If the prompt is empty, has no placeholder, or any
            placeholder is malformed, duplicated, or a second folder placeholder
    """
    if not prompt or not isinstance(prompt, str):
        raise ValidationError("Prompt cannot be empty")

    if not PLACEHOLDER_PATTERN.search(prompt):
        raise ValidationError("Prompt must contain at least one placeholder")

    placeholders: List[Placeholder] = []
    seen_names: set[str] = set()
    folder_count = 0

    for placeholder in iter_placeholders(prompt):
        context = {"token": placeholder.token}
        name = placeholder.name

        if placeholder.options is not None and not (
            placeholder.options.startswith("[") and placeholder.options.endswith("]")
        ):
            raise ValidationError(
                f"Placeholder options must be enclosed in square brackets: {name}",
                context=context,
            )

        if not NAME_PATTERN.match(name):
            raise ValidationError(f"Invalid placeholder name: {name}", context=context)

        if placeholder.type not in VALID_TYPES:
            raise ValidationError(
                f"Invalid placeholder type: {placeholder.type}", context=context
            )

        if name in seen_names:
            raise ValidationError(f"Duplicate placeholder name: {name}", context=context)
        seen_names.add(name)

        if placeholder.type == "folder":
            folder_count += 1
            if folder_count > 1:
                raise ValidationError(
                    "A prompt can only have a maximum of 1 placeholder of type folder",
                    context=context,
                )

        placeholders.append(placeholder)

    return placeholders


def validate_prompt(prompt: str) -> None:
    """Raise ValidationError if ``prompt`` is not a valid template."""
    parse_placeholders(prompt)
