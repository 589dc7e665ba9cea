"""Models for transformer configurations, the library tree and settings."""

from llmforge.models.library import LibraryFolder, LibraryItem
from llmforge.models.loader import load_transformer_file
from llmforge.models.progress import ProgressEvent
from llmforge.models.settings import AIProvider, Settings, load_settings
from llmforge.models.transformer_config import (
    Input,
    InputType,
    ProcessFormat,
    TransformerConfig,
)

__all__ = [
    "AIProvider",
    "Input",
    "InputType",
    "LibraryFolder",
    "LibraryItem",
    "ProcessFormat",
    "ProgressEvent",
    "Settings",
    "TransformerConfig",
    "load_settings",
    "load_transformer_file",
]
