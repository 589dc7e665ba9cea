"""llmforge - Prompt-template transformers run against LLM providers.

Transformers pair a prompt template with typed inputs; running one resolves
the template against files, folders and literal values, sends it to the
configured LLM and writes each response to an output file.
"""

__version__ = "0.1.0"

# Public API
from llmforge.api import from_yaml, open_library, run_transformer, run_transformer_from_yaml

# Engine
from llmforge.core.engine import ExecutionEngine, ExecutionRun, RunStatus

# Exceptions
from llmforge.core.exceptions import (
    EngineError,
    ExistsError,
    GatewayError,
    InputNotFoundError,
    InvalidPathError,
    LLMForgeError,
    NotFoundError,
    PathError,
    SettingsError,
    StoreError,
    ValidationError,
)

# Models
from llmforge.models.settings import AIProvider, Settings, load_settings
from llmforge.models.transformer_config import (
    Input,
    InputType,
    ProcessFormat,
    TransformerConfig,
)

__all__ = [
    # Version
    "__version__",
    # Public API
    "from_yaml",
    "open_library",
    "run_transformer",
    "run_transformer_from_yaml",
    "load_settings",
    # Engine
    "ExecutionEngine",
    "ExecutionRun",
    "RunStatus",
    # Models
    "AIProvider",
    "Input",
    "InputType",
    "ProcessFormat",
    "Settings",
    "TransformerConfig",
    # Exceptions
    "LLMForgeError",
    "ValidationError",
    "InputNotFoundError",
    "NotFoundError",
    "ExistsError",
    "PathError",
    "InvalidPathError",
    "GatewayError",
    "EngineError",
    "StoreError",
    "SettingsError",
]
