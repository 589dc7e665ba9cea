"""DeepSeek chat completions provider."""

from typing import Optional

import requests

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import ChatCompletionsProvider, LLMOptions
from llmforge.llm.registry import register_provider
from llmforge.models.settings import AIProvider, Settings

DEEPSEEK_API_URL = "https://api.deepseek.com/chat/completions"


class DeepSeekProvider(ChatCompletionsProvider):
    name = "DeepSeek"

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        max_tokens: int = 4000,
        timeout: Optional[float] = None,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise GatewayError("DeepSeek API key is missing", context={"provider": self.name})
        super().__init__(model or "deepseek-chat", max_tokens, timeout, max_retries, session)
        self._api_key = api_key

    def build_url(self, options: LLMOptions) -> str:
        return DEEPSEEK_API_URL

    def build_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}


@register_provider(AIProvider.DEEPSEEK)
def create_deepseek_provider(settings: Settings) -> DeepSeekProvider:
    return DeepSeekProvider(
        api_key=settings.api_key_value(),
        model=settings.model_name,
        max_tokens=settings.token_limit,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
