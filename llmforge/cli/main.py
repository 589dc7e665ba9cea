"""Main CLI entry point for llmforge."""

import click

from llmforge import __version__
from llmforge.cli.commands.edit import create, delete, duplicate, move, update
from llmforge.cli.commands.enhance import enhance
from llmforge.cli.commands.folder import folder
from llmforge.cli.commands.init import init
from llmforge.cli.commands.list import list_transformers, providers, show
from llmforge.cli.commands.run import run
from llmforge.cli.commands.share import export, import_command, pull
from llmforge.cli.commands.validate import preview, validate


@click.group()
@click.version_option(version=__version__)
def main():
    """llmforge - Prompt-template transformers run against LLM providers."""
    pass


# Register commands
main.add_command(init)
main.add_command(list_transformers)
main.add_command(show)
main.add_command(create)
main.add_command(update)
main.add_command(delete)
main.add_command(duplicate)
main.add_command(folder)
main.add_command(move)
main.add_command(import_command)
main.add_command(export)
main.add_command(validate)
main.add_command(preview)
main.add_command(run)
main.add_command(enhance)
main.add_command(pull)
main.add_command(providers)


if __name__ == "__main__":
    main()
