"""Exception hierarchy for the llmforge package."""


class LLMForgeError(Exception):
    """Base exception for all llmforge errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ValidationError(LLMForgeError):
    """Raised when a prompt, configuration or execution precondition is invalid."""

    pass


class InputNotFoundError(LLMForgeError):
    """Raised when a prompt placeholder has no matching input."""

    pass


class NotFoundError(LLMForgeError):
    """Raised when a transformer or folder does not exist."""

    pass


class ExistsError(LLMForgeError):
    """Raised when a transformer or folder id is already taken."""

    pass


class PathError(LLMForgeError):
    """Raised when a file or folder path is unusable."""

    pass


class InvalidPathError(PathError):
    """Raised when a path cannot be resolved or does not exist."""

    pass


class GatewayError(LLMForgeError):
    """Raised when a request to an LLM provider fails."""

    pass


class EngineError(LLMForgeError):
    """Raised when a transformer run fails."""

    pass


class StoreError(LLMForgeError):
    """Raised when the transformer library cannot be loaded or saved."""

    pass


class SettingsError(LLMForgeError):
    """Raised when settings parsing or validation fails."""

    pass
