"""Transformer library management: CRUD, .fuzor files and the shared GitHub library."""

from llmforge.library.fuzor import export_transformer, import_configs, import_transformers
from llmforge.library.github import GitHubLibraryClient, flatten_library, normalize_repository
from llmforge.library.manager import (
    TransformerManager,
    preview_transformer,
    validate_transformer_config,
)

__all__ = [
    "GitHubLibraryClient",
    "TransformerManager",
    "export_transformer",
    "flatten_library",
    "import_configs",
    "import_transformers",
    "normalize_repository",
    "preview_transformer",
    "validate_transformer_config",
]
