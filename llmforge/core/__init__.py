"""Core module for llmforge package."""

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

__all__ = [
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
