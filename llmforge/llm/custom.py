"""Provider for any OpenAI-compatible endpoint given by URL."""

from typing import Any, Optional

import requests

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import ChatCompletionsProvider, LLMOptions, PromptOrMessages
from llmforge.llm.registry import register_provider
from llmforge.models.settings import AIProvider, Settings


class CustomProvider(ChatCompletionsProvider):
    name = "Custom"

    def __init__(
        self,
        api_key: Optional[str],
        api_url: Optional[str],
        model: Optional[str] = None,
        max_tokens: int = 4000,
        timeout: Optional[float] = None,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        if not api_url:
            raise GatewayError("Custom API endpoint is missing", context={"provider": self.name})
        super().__init__(model, max_tokens, timeout, max_retries, session)
        self._api_key = api_key
        self._api_url = api_url

    def build_url(self, options: LLMOptions) -> str:
        return self._api_url

    def build_headers(self) -> dict[str, str]:
        return {"api-key": self._api_key} if self._api_key else {}

    def build_payload(
        self, prompt_or_messages: PromptOrMessages, options: LLMOptions
    ) -> dict[str, Any]:
        payload = super().build_payload(prompt_or_messages, options)
        if not payload["model"]:
            del payload["model"]
        return payload


@register_provider(AIProvider.CUSTOM)
def create_custom_provider(settings: Settings) -> CustomProvider:
    return CustomProvider(
        api_key=settings.api_key_value(),
        api_url=settings.model_endpoint,
        model=settings.model_name,
        max_tokens=settings.token_limit,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
