"""Abstract base class for embedding providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

DEFAULT_BATCH_SIZE = 64


class EmbeddingProvider(ABC):
    """Interface for text embedding models."""

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed one batch of texts with a single provider call.

        Args:
            texts: Strings to embed. Never longer than ``max_batch_size``.

        Returns:
            List of embedding vectors (same order as input).
        """

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query string.

        Some providers use different models/prefixes for queries vs documents.
        """
        return self.embed_texts([query])[0]

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimensionality."""

    @property
    def max_batch_size(self) -> int:
        """Largest number of texts accepted by one ``embed_texts`` call."""
        return DEFAULT_BATCH_SIZE

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
