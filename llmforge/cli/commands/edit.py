"""CLI commands for creating and changing transformers."""

import sys

import click

from llmforge.cli.common import (
    library_option,
    load_cli_settings,
    open_manager,
    parse_pairs,
    settings_option,
    vars_option,
)
from llmforge.core.exceptions import LLMForgeError
from llmforge.core.reconciler import reconcile
from llmforge.models.loader import load_transformer_file


@click.command()
@click.argument("definition_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--folder", "folder_id", help="Library folder id to place the transformer in")
@vars_option
@settings_option
@library_option
def create(
    definition_path: str,
    folder_id: str | None,
    vars: tuple,
    settings_path: str | None,
    library_path: str | None,
):
    """Add a transformer from a YAML or JSON definition file.

    Inputs are derived from the prompt placeholders; values given in the
    file are kept for inputs whose name and type match.

    Examples:

        llmforge create summarize.yaml
        llmforge create summarize.yaml --folder docs-folder-id
        llmforge create report.yaml --vars team=platform
    """
    try:
        settings = load_cli_settings(settings_path)
        manager = open_manager(settings, library_path)
        cli_vars = parse_pairs(vars)
        config = load_transformer_file(definition_path, cli_vars=cli_vars if cli_vars else None)
        if folder_id:
            config = config.model_copy(update={"parent_folder_id": folder_id})
        config = manager.create_transformer(reconcile(config))
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created transformer '{config.name}' ({config.id})")


@click.command()
@click.argument("definition_path", type=click.Path(exists=True, dir_okay=False))
@vars_option
@settings_option
@library_option
def update(definition_path: str, vars: tuple, settings_path: str | None, library_path: str | None):
    """Replace a stored transformer with a definition file carrying the same id.

    Examples:

        llmforge show summarize > summarize.yaml
        llmforge update summarize.yaml
    """
    try:
        settings = load_cli_settings(settings_path)
        manager = open_manager(settings, library_path)
        cli_vars = parse_pairs(vars)
        config = load_transformer_file(definition_path, cli_vars=cli_vars if cli_vars else None)
        config = manager.update_transformer(config)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Updated transformer '{config.name}' ({config.id})")
    for config_input in config.input:
        click.echo(f"  {config_input.name}::{config_input.type.value} = {config_input.value!r}")


@click.command()
@click.argument("item_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@settings_option
@library_option
def delete(item_id: str, yes: bool, settings_path: str | None, library_path: str | None):
    """Delete a transformer or a folder with everything inside it.

    Examples:

        llmforge delete 0f8c1e
        llmforge delete docs-folder-id --yes
    """
    try:
        settings = load_cli_settings(settings_path)
        manager = open_manager(settings, library_path)
        config = manager.get_transformer(item_id)
        target_id = config.id if config else item_id
        if not yes:
            click.confirm(f"Delete '{config.name if config else item_id}'?", abort=True)
        manager.delete_transformer(target_id)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Deleted: {target_id}")


@click.command()
@click.argument("transformer")
@settings_option
@library_option
def duplicate(transformer: str, settings_path: str | None, library_path: str | None):
    """Copy a transformer under a new id.

    Examples:

        llmforge duplicate summarize
    """
    try:
        settings = load_cli_settings(settings_path)
        copy = open_manager(settings, library_path).duplicate_transformer(transformer)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created transformer '{copy.name}' ({copy.id})")


@click.command()
@click.argument("item_id")
@click.option("--to", "folder_id", help="Target folder id (omit to move to the top level)")
@settings_option
@library_option
def move(item_id: str, folder_id: str | None, settings_path: str | None, library_path: str | None):
    """Move a transformer or folder into another folder.

    Examples:

        llmforge move 0f8c1e --to docs-folder-id
        llmforge move 0f8c1e
    """
    try:
        settings = load_cli_settings(settings_path)
        manager = open_manager(settings, library_path)
        config = manager.get_transformer(item_id)
        item = manager.move_item(config.id if config else item_id, folder_id)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Moved '{item.name}' to {folder_id or 'the top level'}")
