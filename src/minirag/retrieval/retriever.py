"""Retriever — embed the query, ask the vector store for the nearest chunks."""

from __future__ import annotations

import logging

from minirag.embeddings.embedder import Embedder
from minirag.errors import StoreError, ValidationError
from minirag.vectorstore.base import VectorStore
from minirag.vectorstore.schemas import SearchResult

logger = logging.getLogger(__name__)


class Retriever:
    """Orchestrates query embedding → similarity search.

    The store is the source of truth for similarity ranking: its result
    list is returned as-is, never re-sorted.
    """

    def __init__(self, embedder: Embedder, vector_store: VectorStore):
        self.embedder = embedder
        self.vector_store = vector_store

    def retrieve(self, query: str, top_k: int = 10) -> list[SearchResult]:
        """Return up to ``top_k`` chunks most similar to ``query``.

        Raises:
            ValidationError: Blank query or non-positive ``top_k``.
            EmbeddingFailure: The query could not be embedded.
            StoreError: The similarity search failed.
        """
        if not query.strip():
            raise ValidationError("query must not be empty")
        if top_k <= 0:
            raise ValidationError(f"top_k must be > 0, got {top_k}")

        query_embedding = self.embedder.embed_query(query)

        try:
            results = self.vector_store.search(query_embedding, top_k=top_k)
        except Exception as exc:
            raise StoreError(f"similarity search failed: {exc}") from exc

        logger.info("Retrieved %d results (top_k=%d)", len(results), top_k)
        return results
