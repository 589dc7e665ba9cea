"""CLI commands for browsing the transformer library."""

import sys
from typing import Optional

import click
import yaml

from llmforge.cli.common import library_option, load_cli_settings, open_manager, settings_option
from llmforge.core.exceptions import LLMForgeError
from llmforge.library.manager import TransformerManager
from llmforge.llm.client import LLMClient


def _print_tree(manager: TransformerManager, parent_id: Optional[str], depth: int) -> None:
    for item in manager.children(parent_id):
        indent = "  " * depth
        if item.type == "folder":
            click.echo(f"{indent}[{item.name}] ({item.id})")
            _print_tree(manager, item.id, depth + 1)
        else:
            click.echo(f"{indent}- {item.name} ({item.id})")


@click.command("list")
@click.option("--search", help="Only show transformers whose name or description matches")
@settings_option
@library_option
def list_transformers(search: str | None, settings_path: str | None, library_path: str | None):
    """List the transformers and folders of the library.

    Examples:

        llmforge list
        llmforge list --search summary
    """
    try:
        settings = load_cli_settings(settings_path)
        manager = open_manager(settings, library_path)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if search:
        matches = manager.search_transformers(search)
        if not matches:
            click.echo(f"No transformers match: {search}")
        for config in matches:
            click.echo(f"- {config.name} ({config.id})")
            if config.description:
                click.echo(f"    {config.description[:100]}")
        return

    if not manager.list_items():
        click.echo("The library is empty")
        return
    _print_tree(manager, None, 0)


@click.command()
@click.argument("transformer")
@settings_option
@library_option
def show(transformer: str, settings_path: str | None, library_path: str | None):
    """Show a transformer definition, looked up by id or name.

    Examples:

        llmforge show summarize
    """
    try:
        settings = load_cli_settings(settings_path)
        config = open_manager(settings, library_path).require_transformer(transformer)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(yaml.safe_dump(config.to_dict(), sort_keys=False, allow_unicode=True))


@click.command()
@settings_option
def providers(settings_path: str | None):
    """List the supported LLM providers.

    The provider selected in the settings file is marked with '*'.
    """
    try:
        selected = load_cli_settings(settings_path).ai_provider
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Available Providers:")
    for provider in sorted(LLMClient.supported_providers(), key=lambda p: p.value):
        marker = "*" if provider == selected else "-"
        click.echo(f"  {marker} {provider.value}")
