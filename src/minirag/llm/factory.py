"""LLM provider factory."""

from __future__ import annotations

from minirag.llm.base import LLMProvider
from minirag.registry import ProviderRegistry

_PROVIDERS: ProviderRegistry[LLMProvider] = ProviderRegistry(
    "LLM provider",
    [
        ("ollama", "minirag.llm.ollama_provider", "OllamaLLMProvider"),
        ("anthropic", "minirag.llm.anthropic_provider", "AnthropicLLMProvider"),
        ("openai", "minirag.llm.openai_provider", "OpenAILLMProvider"),
    ],
)


def get_llm_provider(provider: str = "ollama", **kwargs) -> LLMProvider:
    """Get an LLM provider by name.

    Args:
        provider: One of ``ollama``, ``anthropic``, ``openai``.
        **kwargs: Passed to the provider constructor.
    """
    return _PROVIDERS.create(provider, **kwargs)


def available_providers() -> list[str]:
    return _PROVIDERS.names()


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _PROVIDERS.clear()
