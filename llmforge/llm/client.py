"""LLM client: selects the configured provider and exposes an async request API."""

import asyncio
import functools
import logging
from typing import Optional

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import LLMOptions, LLMProvider, PromptOrMessages
from llmforge.llm.registry import get_provider, list_provider_types
from llmforge.models.settings import AIProvider, Settings

logger = logging.getLogger(__name__)


class LLMClient:
    """Gateway over the provider selected in settings.

    The blocking HTTP call runs in the default executor so the event loop
    stays free while a request is in flight.
    """

    def __init__(self, settings: Settings, provider: Optional[LLMProvider] = None):
        self.settings = settings
        self._provider = provider or get_provider(settings.ai_provider, settings)

    @property
    def provider_name(self) -> str:
        return self._provider.name

    async def send_request(
        self, prompt_or_messages: PromptOrMessages, options: Optional[LLMOptions] = None
    ) -> str:
        """Send a prompt or message list and return the completion text.

        Raises:
            GatewayError: If the provider call fails for any reason
        """
        logger.info("Initializing request...")
        loop = asyncio.get_running_loop()
        call = functools.partial(self._provider.send_request, prompt_or_messages, options)
        try:
            result = await loop.run_in_executor(None, call)
        except GatewayError as e:
            logger.error(f"Error while sending request to {self.provider_name}: {e}")
            raise
        except Exception as e:
            logger.error(
                f"Unknown error sending request to {self.provider_name}: {e}", exc_info=True
            )
            raise GatewayError(
                f"Error sending request to LLM: {e}",
                context={"provider": self.provider_name},
            ) from e
        logger.info("Request completed successfully.")
        return result

    @staticmethod
    def supported_providers() -> list[AIProvider]:
        return list_provider_types()
