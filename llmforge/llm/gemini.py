"""Google Gemini generateContent provider."""

import logging
from typing import Any, Optional

import requests

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import (
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    HTTPProvider,
    LLMOptions,
    PromptOrMessages,
)
from llmforge.llm.registry import register_provider
from llmforge.models.settings import AIProvider, Settings

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(HTTPProvider):
    """Sends the prompt as a single user turn; message lists are flattened to ``role: content`` lines."""

    name = "Google Gemini"

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str],
        max_tokens: int = 4000,
        timeout: Optional[float] = None,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise GatewayError("Gemini API key is missing", context={"provider": self.name})
        if not model:
            raise GatewayError("Gemini model is missing", context={"provider": self.name})
        super().__init__(model, max_tokens, timeout, max_retries, session)
        self._api_key = api_key

    def build_url(self, options: LLMOptions) -> str:
        return f"{GEMINI_API_BASE}/{options.model or self.model}:generateContent"

    def build_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self._api_key}

    def build_payload(
        self, prompt_or_messages: PromptOrMessages, options: LLMOptions
    ) -> dict[str, Any]:
        if isinstance(prompt_or_messages, str):
            text = prompt_or_messages
        else:
            text = "\n".join(f"{m.role}: {m.content}" for m in prompt_or_messages)
        return {
            "contents": [{"role": "user", "parts": [{"text": text}]}],
            "generationConfig": {
                "temperature": (
                    options.temperature
                    if options.temperature is not None
                    else DEFAULT_TEMPERATURE
                ),
                "maxOutputTokens": options.max_tokens or self.max_tokens,
                "topP": options.top_p if options.top_p is not None else DEFAULT_TOP_P,
            },
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]

    def log_usage(self, data: dict[str, Any]) -> None:
        usage = data.get("usageMetadata") or {}
        if usage.get("promptTokenCount"):
            logger.info(f"Prompt Token Count: {usage['promptTokenCount']}")
        if usage.get("candidatesTokenCount"):
            logger.info(f"Candidates Token Count: {usage['candidatesTokenCount']}")
        if usage.get("totalTokenCount"):
            logger.info(f"Total Token Count: {usage['totalTokenCount']}")


@register_provider(AIProvider.GOOGLE_GEMINI)
def create_gemini_provider(settings: Settings) -> GeminiProvider:
    return GeminiProvider(
        api_key=settings.api_key_value(),
        model=settings.model_name,
        max_tokens=settings.token_limit,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
