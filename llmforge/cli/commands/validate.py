"""CLI commands for validating and previewing transformers."""

import sys

import click

from llmforge.cli.common import (
    apply_overrides,
    json_logs_option,
    library_option,
    load_cli_settings,
    load_transformer,
    log_level_option,
    parse_pairs,
    set_option,
    settings_option,
)
from llmforge.core.engine import validate_execution
from llmforge.core.exceptions import LLMForgeError
from llmforge.core.logging import configure_logging
from llmforge.core.reconciler import check_input_catalog
from llmforge.library.manager import preview_transformer, validate_transformer_config


@click.command()
@click.argument("transformer")
@click.option(
    "--execution",
    is_flag=True,
    help="Also check run preconditions (terms, input paths, output folder)",
)
@set_option
@settings_option
@library_option
def validate(
    transformer: str,
    execution: bool,
    overrides: tuple,
    settings_path: str | None,
    library_path: str | None,
):
    """Validate a stored transformer or a definition file.

    Checks:
    - Required fields and temperature range
    - Prompt placeholder syntax
    - Inputs matching the prompt placeholders
    - With --execution: everything a run checks before calling the model

    Examples:

        llmforge validate summarize
        llmforge validate summarize.yaml
        llmforge validate summarize --execution --set document=docs/
    """
    try:
        settings = load_cli_settings(settings_path)
        config = apply_overrides(
            load_transformer(transformer, settings, library_path),
            parse_pairs(overrides, "input"),
        )
        validate_transformer_config(config)
        check_input_catalog(config)
        if execution:
            validate_execution(config, settings, settings.resolved_workspace_root())
    except LLMForgeError as e:
        click.echo(f"✗ Transformer validation failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Transformer '{config.name}' is valid")
    click.echo(f"  Inputs: {', '.join(f'{i.name}::{i.type.value}' for i in config.input)}")
    click.echo(f"  Output folder: {config.output_folder or '(not set)'}")
    click.echo(f"  Process format: {config.process_format.value}")
    click.echo(f"  Temperature: {config.temperature}")


@click.command()
@click.argument("transformer")
@set_option
@settings_option
@library_option
@log_level_option
@json_logs_option
def preview(
    transformer: str,
    overrides: tuple,
    settings_path: str | None,
    library_path: str | None,
    log_level: str,
    json_logs: bool,
):
    """Print the prompt a run would send, without calling the model.

    Examples:

        llmforge preview summarize --set document=docs/intro.md
    """
    configure_logging(level=log_level, json_format=json_logs)
    try:
        settings = load_cli_settings(settings_path)
        config = apply_overrides(
            load_transformer(transformer, settings, library_path),
            parse_pairs(overrides, "input"),
        )
        prompt = preview_transformer(config, settings.resolved_workspace_root())
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(prompt)
