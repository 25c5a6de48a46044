"""Vector store factory."""

from __future__ import annotations

from minirag.registry import ProviderRegistry
from minirag.vectorstore.base import VectorStore

_STORES: ProviderRegistry[VectorStore] = ProviderRegistry(
    "vector store",
    [
        ("faiss", "minirag.vectorstore.faiss_store", "FAISSStore"),
        ("qdrant", "minirag.vectorstore.qdrant_store", "QdrantStore"),
    ],
)


def get_vector_store(backend: str = "faiss", **kwargs) -> VectorStore:
    """Get a vector store by backend name.

    Args:
        backend: One of ``faiss``, ``qdrant``.
        **kwargs: Passed to the store constructor.
    """
    return _STORES.create(backend, **kwargs)


def available_stores() -> list[str]:
    """Return names of registered vector stores."""
    return _STORES.names()


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _STORES.clear()
