"""CLI command for improving a transformer prompt with the LLM."""

import sys

import click

from llmforge.cli.common import library_option, load_cli_settings, open_manager, settings_option
from llmforge.core.engine import run_async
from llmforge.core.exceptions import LLMForgeError
from llmforge.llm.client import LLMClient
from llmforge.llm.enhance import enhance_prompt


@click.command()
@click.argument("transformer")
@click.option("--apply", "apply_changes", is_flag=True, help="Store the enhanced prompt")
@settings_option
@library_option
def enhance(transformer: str, apply_changes: bool, settings_path: str | None, library_path: str | None):
    """Ask the configured LLM to rewrite a transformer's prompt.

    With --apply the transformer is updated and its inputs are reconciled
    with the new placeholders.

    Examples:

        llmforge enhance summarize
        llmforge enhance summarize --apply
    """
    try:
        settings = load_cli_settings(settings_path)
        manager = open_manager(settings, library_path)
        config = manager.require_transformer(transformer)
        enhanced = run_async(
            enhance_prompt(LLMClient(settings), config.name, config.description, config.prompt)
        )
        click.echo(enhanced)

        if apply_changes:
            updated = manager.update_transformer(config.model_copy(update={"prompt": enhanced}))
            click.echo(f"Updated transformer '{updated.name}'", err=True)
    except LLMForgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
