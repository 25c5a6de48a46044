"""Rerank provider factory."""

from __future__ import annotations

from minirag.registry import ProviderRegistry
from minirag.reranking.base import RerankProvider

_PROVIDERS: ProviderRegistry[RerankProvider] = ProviderRegistry(
    "rerank provider",
    [
        ("cross-encoder", "minirag.reranking.cross_encoder_provider", "CrossEncoderRerankProvider"),
        ("cohere", "minirag.reranking.cohere_provider", "CohereRerankProvider"),
    ],
)


def get_rerank_provider(provider: str = "cross-encoder", **kwargs) -> RerankProvider:
    """Get a rerank provider by name (``cross-encoder`` or ``cohere``)."""
    return _PROVIDERS.create(provider, **kwargs)


def available_providers() -> list[str]:
    return _PROVIDERS.names()


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _PROVIDERS.clear()
