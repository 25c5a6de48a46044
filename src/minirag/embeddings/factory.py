"""Embedding provider factory."""

from __future__ import annotations

from minirag.embeddings.base import EmbeddingProvider
from minirag.registry import ProviderRegistry

_PROVIDERS: ProviderRegistry[EmbeddingProvider] = ProviderRegistry(
    "embedding provider",
    [
        ("ollama", "minirag.embeddings.ollama_provider", "OllamaEmbeddingProvider"),
        ("openai", "minirag.embeddings.openai_provider", "OpenAIEmbeddingProvider"),
        ("huggingface", "minirag.embeddings.huggingface_provider", "HuggingFaceEmbeddingProvider"),
    ],
)


def get_embedding_provider(provider: str = "ollama", **kwargs) -> EmbeddingProvider:
    """Get an embedding provider by name.

    Args:
        provider: One of ``ollama``, ``openai``, ``huggingface``.
        **kwargs: Passed to the provider constructor (model, dimension,
            batch_size, timeout).
    """
    return _PROVIDERS.create(provider, **kwargs)


def available_providers() -> list[str]:
    return _PROVIDERS.names()


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _PROVIDERS.clear()
