"""CLI commands for sharing transformers: .fuzor files and the GitHub library."""

import sys

import click

from llmforge.cli.common import library_option, load_cli_settings, open_manager, settings_option
from llmforge.core.exceptions import LLMForgeError
from llmforge.library.fuzor import export_transformer, import_configs, import_transformers
from llmforge.library.github import GitHubLibraryClient, flatten_library


@click.command("import")
@click.argument("fuzor_path", type=click.Path(exists=True, dir_okay=False))
@settings_option
@library_option
def import_command(fuzor_path: str, settings_path: str | None, library_path: str | None):
    """Import the transformers of a .fuzor file.

    Transformers whose id is already in the library are skipped.

    Examples:

        llmforge import summarize.fuzor
    """
    try:
        settings = load_cli_settings(settings_path)
        imported, total = import_transformers(open_manager(settings, library_path), fuzor_path)
    except LLMForgeError as e:
        click.echo(f"Failed to import transformers: {e}", err=True)
        sys.exit(1)

    click.echo(f"Successfully imported {imported} of {total} transformers")
    if imported < total:
        sys.exit(1)


@click.command()
@click.argument("transformer")
@click.option(
    "--output",
    "output_path",
    default=".",
    type=click.Path(),
    help="Target .fuzor file or directory (default: <name>.fuzor in the current directory)",
)
@settings_option
@library_option
def export(transformer: str, output_path: str, settings_path: str | None, library_path: str | None):
    """Export a transformer to a .fuzor file.

    File and folder input values and the output folder are replaced with '/'
    so no local paths are shared.

    Examples:

        llmforge export summarize
        llmforge export summarize --output shared/summarize.fuzor
    """
    try:
        settings = load_cli_settings(settings_path)
        config = open_manager(settings, library_path).require_transformer(transformer)
        target = export_transformer(config, output_path)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Exported transformer {config.name} to {target}")


@click.command()
@click.option("--repo", help="GitHub repository (default: git_library_name setting)")
@click.option(
    "--name",
    "names",
    multiple=True,
    help="Only import transformers with this name (can be used multiple times)",
)
@click.option("--list", "list_only", is_flag=True, help="List the remote transformers only")
@settings_option
@library_option
def pull(
    repo: str | None,
    names: tuple,
    list_only: bool,
    settings_path: str | None,
    library_path: str | None,
):
    """Import transformers from a shared library hosted on GitHub.

    The repository must contain a fuzor.json library file.

    Examples:

        llmforge pull --repo owner/transformers --list
        llmforge pull --name "Release notes"
    """
    try:
        settings = load_cli_settings(settings_path)
        repository = repo or settings.git_library_name
        if not repository:
            click.echo("Error: No repository given. Use --repo or set git_library_name", err=True)
            sys.exit(1)

        client = GitHubLibraryClient(token=settings.github_token_value())
        configs = list(flatten_library(client.fetch_library(repository)))
        if names:
            configs = [c for c in configs if c.name in names]

        if list_only:
            click.echo(f"Library - {repository}:")
            for config in configs:
                click.echo(f"  - {config.name} ({config.id})")
            return

        imported, total = import_configs(open_manager(settings, library_path), configs)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Successfully imported {imported} of {total} transformers")
