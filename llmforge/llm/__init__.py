"""LLM gateway: provider registry, provider shims and the async client.

Provider modules register themselves on import.
"""

from llmforge.llm.base import Gateway, LLMMessage, LLMOptions, LLMProvider
from llmforge.llm.registry import (
    clear_registry,
    get_provider,
    list_provider_types,
    register_provider,
)

from llmforge.llm.azure_openai import AzureOpenAIProvider, create_azure_openai_provider
from llmforge.llm.custom import CustomProvider, create_custom_provider
from llmforge.llm.deepseek import DeepSeekProvider, create_deepseek_provider
from llmforge.llm.gemini import GeminiProvider, create_gemini_provider
from llmforge.llm.openai import OpenAIProvider, create_openai_provider

from llmforge.llm.client import LLMClient
from llmforge.llm.enhance import enhance_prompt

__all__ = [
    "AzureOpenAIProvider",
    "CustomProvider",
    "DeepSeekProvider",
    "Gateway",
    "GeminiProvider",
    "LLMClient",
    "LLMMessage",
    "LLMOptions",
    "LLMProvider",
    "OpenAIProvider",
    "clear_registry",
    "enhance_prompt",
    "get_provider",
    "list_provider_types",
    "register_provider",
    "reregister_builtins",
]


def reregister_builtins() -> None:
    """Re-register built-in providers after the registry is cleared.

    Intended for tests that call clear_registry().
    """
    from llmforge.models.settings import AIProvider

    builtins = {
        AIProvider.OPENAI: create_openai_provider,
        AIProvider.AZURE_OPENAI: create_azure_openai_provider,
        AIProvider.GOOGLE_GEMINI: create_gemini_provider,
        AIProvider.DEEPSEEK: create_deepseek_provider,
        AIProvider.CUSTOM: create_custom_provider,
    }
    current = set(list_provider_types())
    for provider, factory in builtins.items():
        if provider not in current:
            register_provider(provider, factory)
