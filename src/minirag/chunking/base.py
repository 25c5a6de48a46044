"""Abstract base class for all chunkers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from minirag.chunking.schemas import Chunk


class BaseChunker(ABC):
    """Interface for document chunking strategies."""

    @abstractmethod
    def chunk(self, text: str, source: str, title: str | None = None) -> list[Chunk]:
        """Split text into chunks.

        Args:
            text: Full document text.
            source: Identifier of the document (usually a filename).
            title: Optional human-readable title propagated to each chunk.

        Returns:
            List of ``Chunk`` objects in document order. Empty when the
            text holds nothing but whitespace.
        """
