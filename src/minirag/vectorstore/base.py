"""Abstract base class for vector stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from minirag.vectorstore.schemas import SearchResult, SourceSummary, VectorRecord


class VectorStore(ABC):
    """Interface for vector store backends.

    Stores are insert-only: ``add`` never replaces an existing record.
    Concurrent writers and readers get whatever consistency the backend
    offers; a search right after ``add`` may not see the new records.
    """

    @abstractmethod
    def add(self, records: list[VectorRecord]) -> int:
        """Insert records into the store, assigning their integer ids.

        Returns:
            Number of records inserted.
        """

    @abstractmethod
    def search(self, query_embedding: list[float], top_k: int = 10) -> list[SearchResult]:
        """Search for similar documents.

        Args:
            query_embedding: The query vector.
            top_k: Maximum results to return.

        Returns:
            List of ``SearchResult`` sorted by similarity (highest first).
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of records in the store."""

    @abstractmethod
    def clear(self) -> None:
        """Delete all records."""

    @abstractmethod
    def list_sources(self) -> list[SourceSummary]:
        """Aggregate records per source, most recently first seen first."""

    @abstractmethod
    def delete_source(self, source: str) -> int:
        """Delete every record whose metadata source equals ``source``.

        Returns:
            Number of records deleted.
        """

    @abstractmethod
    def replace_source(self, source: str, records: list[VectorRecord]) -> int:
        """Swap every record of ``source`` for ``records``.

        The earlier records are only removed once the new ones are stored;
        if inserting fails the store is left as it was.

        Returns:
            Number of earlier records removed.
        """

    def save(self, path: str) -> None:
        """Persist the store to disk (optional)."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support save()")

    def load(self, path: str) -> None:
        """Load the store from disk (optional)."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support load()")

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__
