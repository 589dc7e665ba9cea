"""CLI commands for library folders."""

import sys
import uuid

import click

from llmforge.cli.common import library_option, load_cli_settings, open_manager, settings_option
from llmforge.core.exceptions import LLMForgeError
from llmforge.models.library import LibraryFolder


@click.group()
def folder():
    """Create and rename library folders."""
    pass


@folder.command("create")
@click.argument("name")
@click.option("--description", help="Folder description")
@click.option("--parent", "parent_id", help="Parent folder id")
@settings_option
@library_option
def create_folder(
    name: str,
    description: str | None,
    parent_id: str | None,
    settings_path: str | None,
    library_path: str | None,
):
    """Create a folder.

    Examples:

        llmforge folder create Docs
        llmforge folder create Reviews --parent docs-folder-id
    """
    try:
        settings = load_cli_settings(settings_path)
        new_folder = LibraryFolder(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            parent_folder_id=parent_id,
        )
        open_manager(settings, library_path).create_folder(new_folder)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created folder '{new_folder.name}' ({new_folder.id})")


@folder.command("rename")
@click.argument("folder_id")
@click.argument("new_name")
@settings_option
@library_option
def rename_folder(folder_id: str, new_name: str, settings_path: str | None, library_path: str | None):
    """Rename a folder.

    Examples:

        llmforge folder rename docs-folder-id Documentation
    """
    try:
        settings = load_cli_settings(settings_path)
        renamed = open_manager(settings, library_path).rename_folder(folder_id, new_name)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Renamed folder to '{renamed.name}'")
