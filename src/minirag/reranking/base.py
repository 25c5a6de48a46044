"""Abstract base class for rerank providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class RerankProvider(ABC):
    """Interface for query/passage relevance scorers."""

    @abstractmethod
    def score(self, query: str, passages: list[str]) -> list[float]:
        """Score each ``(query, passage)`` pair.

        Args:
            query: The raw search query.
            passages: Candidate passages.

        Returns:
            One relevance score per passage (same order as input). Higher
            means more relevant.
        """

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
