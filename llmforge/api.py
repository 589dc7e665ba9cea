"""Public Python API for llmforge package.

This module provides the main entry points for loading and running transformers.
"""

from pathlib import Path
from typing import Optional

from llmforge.core.engine import ExecutionEngine, ExecutionRun, run_async
from llmforge.library.manager import TransformerManager
from llmforge.llm.base import Gateway
from llmforge.models.loader import load_transformer_file
from llmforge.models.settings import Settings, load_settings
from llmforge.models.transformer_config import TransformerConfig
from llmforge.store.library_store import LocalLibraryStore


def from_yaml(path: str) -> TransformerConfig:
    """Load a transformer definition from a YAML or JSON file.

    Raises:
        ValidationError: If the file is missing or invalid

    Example:
        >>> config = from_yaml("transformers/summarize.yaml")
        >>> print(config.name)
        summarize
    """
    return load_transformer_file(path, cli_vars=None)


def open_library(settings: Optional[Settings] = None) -> TransformerManager:
    """Open the transformer library configured in ``settings``."""
    settings = settings or load_settings()
    return TransformerManager(LocalLibraryStore(settings.resolved_library_path()))


def run_transformer(
    config: TransformerConfig,
    settings: Settings,
    gateway: Optional[Gateway] = None,
    workspace_root: Optional[str] = None,
) -> ExecutionRun:
    """Validate and run a transformer, blocking until it finishes.

    Args:
        config: Transformer to run
        settings: Settings selecting the LLM provider
        gateway: Gateway to use instead of the configured provider
        workspace_root: Root for relative paths (defaults to the settings value)

    Returns:
        The finished run, with its outputs and metrics

    Raises:
        ValidationError: If a precondition fails
        EngineError: If the run fails

    Example:
        >>> from llmforge import from_yaml, load_settings, run_transformer
        >>> run = run_transformer(from_yaml("summarize.yaml"), load_settings())
        >>> print(run.outputs)
    """
    engine = ExecutionEngine(settings, gateway=gateway, workspace_root=workspace_root)
    return run_async(engine.execute(config))


def run_transformer_from_yaml(
    path: str,
    settings_path: Optional[str | Path] = None,
) -> ExecutionRun:
    """Load a transformer definition and run it with the settings file.

    Convenience function that combines `from_yaml()`, `load_settings()` and
    `run_transformer()`.
    """
    return run_transformer(from_yaml(path), load_settings(settings_path))
