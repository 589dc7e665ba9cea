"""Resolves prompt templates into the text sent to the LLM."""

import logging
import os
from typing import Dict, List, Optional

from llmforge.core.exceptions import InputNotFoundError
from llmforge.core.files import (
    get_absolute_path,
    list_folder_files,
    read_file_contents,
    resolve_folder,
)
from llmforge.core.output import get_output_file_name
from llmforge.core.placeholders import PLACEHOLDER_PATTERN, iter_placeholders
from llmforge.models.transformer_config import (
    LITERAL_INPUT_TYPES,
    Input,
    InputType,
    ProcessFormat,
    TransformerConfig,
)

logger = logging.getLogger(__name__)

PROMPT_POSTFIX = (
    "### Additional LLM Instructions \n"
    " The output will be written to a file with an extension matching {output_file_name}."
    " Respond with only the content intended for the file."
    " Do not include any conversation, explanations, lead-ins, bullet points,"
    " placeholders, input instructions, or additional notes in your response."
)


def join_folder_contents(config_input: Input, workspace_root: Optional[str] = None) -> str:
    """Concatenate the top-level files of a folder input as ``FileName:`` blocks."""
    folder = resolve_folder(config_input.value, workspace_root)
    blocks = []
    for path in list_folder_files(folder):
        content = read_file_contents(str(path))
        blocks.append(f"FileName: {path.name}\n{content}\n\n")
    return "".join(blocks).strip()


def _substitute(
    config: TransformerConfig, config_input: Input, workspace_root: Optional[str]
) -> str:
    value = config_input.value
    if config_input.type in LITERAL_INPUT_TYPES:
        return value
    if config_input.type == InputType.FILE:
        return read_file_contents(value, workspace_root)

    # a folder input naming a file is read as that file, as the walker does
    location = get_absolute_path(value, workspace_root)
    if location and os.path.isfile(location):
        return read_file_contents(location)
    resolve_folder(value, workspace_root)
    if config.process_format == ProcessFormat.JOIN_FILES:
        return join_folder_contents(config_input, workspace_root)
    # eachFile: the batch walker substitutes one file at a time
    return value


def resolve_prompt(config: TransformerConfig, workspace_root: Optional[str] = None) -> str:
    """Substitute every placeholder of ``config.prompt`` and append the output instructions.

    Placeholders are resolved left to right against the input of the same
    name, using the input's type. Inserted values are never re-scanned for
    placeholders. Tokens with identical text all receive the first resolved
    value.

    Args:
        config: Transformer configuration
        workspace_root: Root for relative file and folder paths

    Returns:
        The prompt to send to the LLM

    Raises:
        InputNotFoundError: If a placeholder has no matching input
        PathError: If a file or folder input cannot be read
    """
    inputs: Dict[str, Input] = {}
    for placeholder in iter_placeholders(config.prompt):
        config_input = config.get_input(placeholder.name)
        if config_input is None:
            raise InputNotFoundError(
                f"Input {placeholder.name} not found in config",
                context={"transformer": config.name, "token": placeholder.token},
            )
        inputs.setdefault(placeholder.token, config_input)
        logger.debug(
            f"Found placeholder {placeholder.token} of type {placeholder.type}",
            extra={"transformer_name": config.name},
        )

    resolved: Dict[str, str] = {}
    segments: List[str] = []
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(config.prompt):
        token = match.group(0)
        segments.append(config.prompt[position : match.start()])
        position = match.end()

        config_input = inputs[token]
        if config_input.value is None:
            segments.append(token)
            continue
        if token not in resolved:
            resolved[token] = _substitute(config, config_input, workspace_root)
        segments.append(resolved[token])
    segments.append(config.prompt[position:])

    postfix = PROMPT_POSTFIX.format(output_file_name=get_output_file_name(config))
    return "".join(segments) + "\n\n" + postfix
