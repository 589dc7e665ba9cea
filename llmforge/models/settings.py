"""Application settings: LLM provider selection, credentials and workspace."""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError

from llmforge.core.exceptions import SettingsError
from llmforge.models.templates import render_templates

DEFAULT_SETTINGS_PATH = Path.home() / ".llmforge" / "settings.yaml"
DEFAULT_LIBRARY_PATH = Path.home() / ".llmforge" / "library.json"


class AIProvider(str, Enum):
    """Supported LLM providers. The value is the name used in settings files."""

    OPENAI = "OpenAI"
    AZURE_OPENAI = "Azure OpenAI"
    GOOGLE_GEMINI = "Google Gemini"
    DEEPSEEK = "DeepSeek"
    CUSTOM = "Custom"


class Settings(BaseModel):
    """Key-value settings read from a YAML file."""

    model_config = ConfigDict(protected_namespaces=(), populate_by_name=True)

    ai_provider: AIProvider = Field(default=AIProvider.OPENAI, description="LLM provider")
    api_key: Optional[SecretStr] = Field(default=None, description="Provider API key")
    model_name: Optional[str] = Field(default=None, description="Model or deployment name")
    model_endpoint: Optional[str] = Field(
        default=None, description="Endpoint for Azure OpenAI and custom providers"
    )
    api_version: Optional[str] = Field(default=None, description="Azure OpenAI API version")
    accept_terms: bool = Field(
        default=False, description="Terms of service accepted; required to execute"
    )
    token_limit: int = Field(default=4000, gt=0, description="Max tokens per completion")
    git_library_name: Optional[str] = Field(
        default=None, description="GitHub repository (owner/name) of the shared library"
    )
    github_token: Optional[SecretStr] = Field(default=None, description="GitHub token")
    request_timeout: Optional[float] = Field(
        default=300.0, gt=0, description="Seconds before an LLM request is abandoned"
    )
    max_retries: int = Field(default=3, ge=0, description="Retries on 429/5xx responses")
    workspace_root: Optional[str] = Field(
        default=None, description="Root for resolving relative input and output paths"
    )
    library_path: Optional[str] = Field(
        default=None, description="Location of the transformer library JSON file"
    )

    def api_key_value(self) -> Optional[str]:
        return self.api_key.get_secret_value() if self.api_key else None

    def github_token_value(self) -> Optional[str]:
        return self.github_token.get_secret_value() if self.github_token else None

    def resolved_workspace_root(self) -> str:
        """Workspace root, defaulting to the current directory."""
        return str(Path(self.workspace_root or Path.cwd()).expanduser().resolve())

    def resolved_library_path(self) -> Path:
        return Path(self.library_path).expanduser() if self.library_path else DEFAULT_LIBRARY_PATH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise SettingsError(f"Settings validation failed: {e}") from e


def load_settings(
    path: str | Path | None = None, cli_vars: Dict[str, str] | None = None
) -> Settings:
    """
    Load settings from a YAML file, rendering env_var/var templates first.

    A missing file yields default settings.

    Args:
        path: Settings file (defaults to ~/.llmforge/settings.yaml)
        cli_vars: Variables passed via CLI (e.g., --vars key=value)

    Raises:
        SettingsError: If the file is not valid YAML or fails validation
    """
    settings_path = Path(path) if path else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(
            f"Invalid YAML in settings file: {e}", context={"path": str(settings_path)}
        ) from e

    if not isinstance(data, dict):
        raise SettingsError(
            "Settings file must contain a YAML dictionary",
            context={"path": str(settings_path)},
        )

    return Settings.from_dict(render_templates(data, cli_vars))
