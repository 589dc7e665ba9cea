"""Azure OpenAI deployments provider."""

from typing import Any, Optional

import requests

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import ChatCompletionsProvider, LLMOptions, PromptOrMessages
from llmforge.llm.registry import register_provider
from llmforge.models.settings import AIProvider, Settings

DEFAULT_API_VERSION = "2024-06-01"


class AzureOpenAIProvider(ChatCompletionsProvider):
    """Calls ``{endpoint}/openai/deployments/{model}/chat/completions``.

    The model name doubles as the deployment name.
    """

    name = "Azure OpenAI"

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: Optional[str],
        model: Optional[str] = None,
        api_version: Optional[str] = None,
        max_tokens: int = 4000,
        timeout: Optional[float] = None,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise GatewayError("Azure OpenAI API key is missing", context={"provider": self.name})
        if not endpoint:
            raise GatewayError("Azure OpenAI endpoint is missing", context={"provider": self.name})
        super().__init__(model or "gpt-4o", max_tokens, timeout, max_retries, session)
        self._api_key = api_key
        self._endpoint = endpoint.rstrip("/")
        self._api_version = api_version or DEFAULT_API_VERSION

    def build_url(self, options: LLMOptions) -> str:
        return (
            f"{self._endpoint}/openai/deployments/{self.model}/chat/completions"
            f"?api-version={self._api_version}"
        )

    def build_headers(self) -> dict[str, str]:
        return {"api-key": self._api_key}

    def build_payload(
        self, prompt_or_messages: PromptOrMessages, options: LLMOptions
    ) -> dict[str, Any]:
        payload = super().build_payload(prompt_or_messages, options)
        payload["model"] = self.model
        return payload


@register_provider(AIProvider.AZURE_OPENAI)
def create_azure_openai_provider(settings: Settings) -> AzureOpenAIProvider:
    return AzureOpenAIProvider(
        api_key=settings.api_key_value(),
        endpoint=settings.model_endpoint,
        model=settings.model_name,
        api_version=settings.api_version,
        max_tokens=settings.token_limit,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
