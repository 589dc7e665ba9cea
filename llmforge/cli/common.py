"""Options and helpers shared by the CLI commands."""

import sys
from pathlib import Path
from typing import Dict, Iterable, Optional

import click

from llmforge.core.exceptions import NotFoundError
from llmforge.library.manager import TransformerManager
from llmforge.models.loader import load_transformer_file
from llmforge.models.settings import Settings, load_settings
from llmforge.models.transformer_config import TransformerConfig
from llmforge.store.library_store import LocalLibraryStore

settings_option = click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False),
    help="Settings YAML file (default: ~/.llmforge/settings.yaml)",
)
library_option = click.option(
    "--library",
    "library_path",
    type=click.Path(dir_okay=False),
    help="Library JSON file (default: library_path setting or ~/.llmforge/library.json)",
)
vars_option = click.option(
    "--vars",
    multiple=True,
    help="CLI variables in key=value format (can be used multiple times)",
)
log_level_option = click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Log level (default: INFO)",
)
json_logs_option = click.option(
    "--json-logs",
    is_flag=True,
    help="Use JSON format for logs",
)
set_option = click.option(
    "--set",
    "overrides",
    multiple=True,
    help="Input value override in name=value format (can be used multiple times)",
)


def parse_pairs(pairs: Iterable[str], label: str = "variable") -> Dict[str, str]:
    """Parse ``key=value`` pairs, exiting with an error on malformed entries."""
    parsed = {}
    for pair in pairs:
        if "=" not in pair:
            click.echo(f"Error: Invalid {label} format: {pair}. Use key=value", err=True)
            sys.exit(1)
        key, value = pair.split("=", 1)
        parsed[key] = value
    return parsed


def load_cli_settings(settings_path: Optional[str], vars: Iterable[str] = ()) -> Settings:
    cli_vars = parse_pairs(vars)
    return load_settings(settings_path, cli_vars=cli_vars if cli_vars else None)


def open_manager(settings: Settings, library_path: Optional[str]) -> TransformerManager:
    path = library_path or settings.resolved_library_path()
    return TransformerManager(LocalLibraryStore(path))


def apply_overrides(config: TransformerConfig, overrides: Dict[str, str]) -> TransformerConfig:
    """Return ``config`` with the named input values replaced.

    Raises:
        NotFoundError: If an override names an unknown input
    """
    if not overrides:
        return config
    known = {i.name for i in config.input}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise NotFoundError(
            f"Unknown input(s): {', '.join(unknown)}", context={"transformer": config.name}
        )
    inputs = [
        i.model_copy(update={"value": overrides[i.name]}) if i.name in overrides else i
        for i in config.input
    ]
    return config.with_inputs(inputs)


def load_transformer(
    transformer: str, settings: Settings, library_path: Optional[str]
) -> TransformerConfig:
    """Load ``transformer`` from a definition file if it names one, else from the library."""
    if Path(transformer).is_file():
        return load_transformer_file(transformer)
    return open_manager(settings, library_path).require_transformer(transformer)
