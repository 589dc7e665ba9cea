"""Uniform request contract shared by all LLM providers."""

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol, Sequence, Union, runtime_checkable

import requests
from pydantic import BaseModel
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from llmforge.core.exceptions import GatewayError

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
RETRY_STATUS_CODES = [429, 500, 502, 503, 504]


class LLMMessage(BaseModel):
    """One chat message."""

    role: Literal["user", "assistant", "system"]
    content: str


@dataclass(frozen=True)
class LLMOptions:
    """Per-request overrides. Unset fields fall back to provider defaults."""

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    model: Optional[str] = None
    top_p: Optional[float] = None


PromptOrMessages = Union[str, Sequence[LLMMessage]]


def to_messages(prompt_or_messages: PromptOrMessages) -> list[dict[str, str]]:
    """Normalize a prompt string or message list to chat message dicts."""
    if isinstance(prompt_or_messages, str):
        return [{"role": "user", "content": prompt_or_messages}]
    return [message.model_dump() for message in prompt_or_messages]


@runtime_checkable
class Gateway(Protocol):
    """Asynchronous LLM gateway consumed by the execution engine."""

    async def send_request(
        self, prompt_or_messages: PromptOrMessages, options: Optional[LLMOptions] = None
    ) -> str:
        """Send a prompt and return the completion text.

        Raises:
            GatewayError: If the provider call fails
        """
        ...


@runtime_checkable
class LLMProvider(Protocol):
    """Blocking provider shim: one implementation per vendor."""

    name: str

    def send_request(
        self, prompt_or_messages: PromptOrMessages, options: Optional[LLMOptions] = None
    ) -> str:
        ...


class HTTPProvider:
    """Base class for providers reached over a JSON HTTP API.

    Subclasses build the vendor URL, headers and payload and extract the
    completion text from the response body.
    """

    name = "http"

    def __init__(
        self,
        model: Optional[str],
        max_tokens: int = 4000,
        timeout: Optional[float] = None,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._session = session or self._build_session(max_retries)

    @staticmethod
    def _build_session(max_retries: int) -> requests.Session:
        session = requests.Session()
        if max_retries > 0:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=1.0,
                status_forcelist=RETRY_STATUS_CODES,
                allowed_methods=["POST"],
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        return session

    def build_url(self, options: LLMOptions) -> str:
        raise NotImplementedError

    def build_headers(self) -> dict[str, str]:
        raise NotImplementedError

    def build_payload(
        self, prompt_or_messages: PromptOrMessages, options: LLMOptions
    ) -> dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def log_usage(self, data: dict[str, Any]) -> None:
        pass

    def send_request(
        self, prompt_or_messages: PromptOrMessages, options: Optional[LLMOptions] = None
    ) -> str:
        """Send one request and return the completion text.

        Raises:
            GatewayError: On transport errors, non-2xx responses or malformed bodies
        """
        options = options or LLMOptions()
        model = options.model or self.model
        logger.info(f"Sending request to {self.name} with model: {model}")

        url = self.build_url(options)
        payload = self.build_payload(prompt_or_messages, options)
        headers = {"Content-Type": "application/json", **self.build_headers()}

        try:
            response = self._session.post(
                url, json=payload, headers=headers, timeout=self.timeout
            )
        except RequestException as e:
            raise GatewayError(
                f"Request to {self.name} failed: {e}",
                context={"provider": self.name},
            ) from e

        if not response.ok:
            body = response.text
            if body:
                logger.error(f"{self.name} API error response: {body}")
            raise GatewayError(
                f"HTTP error! status: {response.status_code}",
                context={"provider": self.name, "status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(
                f"{self.name} returned a non-JSON response: {e}",
                context={"provider": self.name},
            ) from e

        logger.info("Response received successfully.")
        self.log_usage(data)

        try:
            return self.extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            raise GatewayError(
                f"Unexpected {self.name} response format: {e}",
                context={"provider": self.name},
            ) from e


class ChatCompletionsProvider(HTTPProvider):
    """Providers speaking the OpenAI chat completions envelope."""

    def build_payload(
        self, prompt_or_messages: PromptOrMessages, options: LLMOptions
    ) -> dict[str, Any]:
        return {
            "model": options.model or self.model,
            "messages": to_messages(prompt_or_messages),
            "temperature": (
                options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
            ),
            "max_tokens": options.max_tokens or self.max_tokens,
            "top_p": options.top_p if options.top_p is not None else DEFAULT_TOP_P,
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    def log_usage(self, data: dict[str, Any]) -> None:
        usage = data.get("usage")
        if usage:
            logger.info(
                f"Tokens Used - Prompt: {usage.get('prompt_tokens')}, "
                f"Completion: {usage.get('completion_tokens')}, "
                f"Total: {usage.get('total_tokens')}"
            )
