"""Provider registry: the single point where an AIProvider becomes a client."""

from typing import Callable, overload

from llmforge.core.exceptions import GatewayError
from llmforge.llm.base import LLMProvider
from llmforge.models.settings import AIProvider, Settings

ProviderFactory = Callable[[Settings], LLMProvider]

_provider_registry: dict[AIProvider, ProviderFactory] = {}


@overload
def register_provider(provider: AIProvider) -> Callable[[ProviderFactory], ProviderFactory]: ...


@overload
def register_provider(provider: AIProvider, factory: ProviderFactory) -> None: ...


def register_provider(
    provider: AIProvider,
    factory: ProviderFactory | None = None,
) -> Callable[[ProviderFactory], ProviderFactory] | None:
    """Register a provider factory.

    Can be used as a decorator or called directly:

        @register_provider(AIProvider.OPENAI)
        def create_openai_provider(settings):
            return OpenAIProvider(...)

    Raises:
        GatewayError: If the provider is already registered.
    """

    def _register(f: ProviderFactory) -> ProviderFactory:
        if provider in _provider_registry:
            raise GatewayError(
                f"Provider '{provider.value}' is already registered",
                context={"provider": provider.value},
            )
        _provider_registry[provider] = f
        return f

    if factory is not None:
        _register(factory)
        return None

    return _register


def get_provider(provider: AIProvider, settings: Settings) -> LLMProvider:
    """Create the provider client selected by ``provider``.

    Raises:
        GatewayError: If the provider is not registered or its settings are incomplete
    """
    factory = _provider_registry.get(provider)
    if factory is None:
        available = ", ".join(p.value for p in list_provider_types()) or "(none)"
        raise GatewayError(
            f"Unsupported provider: {provider.value}",
            context={"provider": provider.value, "available_providers": available},
        )
    return factory(settings)


def list_provider_types() -> list[AIProvider]:
    """Return all registered providers."""
    return sorted(_provider_registry.keys(), key=lambda p: p.value)


def clear_registry() -> None:
    """Clear all registered providers. Intended for testing only."""
    _provider_registry.clear()
