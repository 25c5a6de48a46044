"""Embedder — batch texts through an embedding provider, all-or-nothing.

Inputs are split into the fewest batches the provider accepts. Batches may
run concurrently; results are always reassembled in input order, so vector
``i`` belongs to text ``i``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from minirag.embeddings.base import EmbeddingProvider
from minirag.errors import EmbeddingFailure, ValidationError

logger = logging.getLogger(__name__)


class Embedder:
    """Turn ordered texts into ordered vectors via an ``EmbeddingProvider``."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        batch_size: int | None = None,
        max_concurrency: int = 1,
    ):
        if max_concurrency < 1:
            raise ValidationError(f"max_concurrency must be >= 1, got {max_concurrency}")
        limit = provider.max_batch_size
        self.provider = provider
        self.batch_size = min(batch_size, limit) if batch_size else limit
        if self.batch_size < 1:
            raise ValidationError(f"batch_size must be >= 1, got {self.batch_size}")
        self.max_concurrency = max_concurrency

    @property
    def dimension(self) -> int:
        return self.provider.dimension

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed every text, one vector per text in the same order.

        Raises:
            EmbeddingFailure: If any batch fails or returns malformed vectors.
                No partial result is ever returned.
        """
        if not texts:
            return []

        batches = [
            texts[i : i + self.batch_size]
            for i in range(0, len(texts), self.batch_size)
        ]

        if self.max_concurrency > 1 and len(batches) > 1:
            workers = min(self.max_concurrency, len(batches))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order regardless of completion order
                results = list(executor.map(self._embed_batch, batches))
        else:
            results = [self._embed_batch(batch) for batch in batches]

        vectors = [vec for batch_vectors in results for vec in batch_vectors]
        logger.info(
            "Embedded %d texts in %d batch(es) with %s",
            len(texts), len(batches), self.provider.provider_name(),
        )
        return vectors

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query string as a one-element batch."""
        try:
            vector = self.provider.embed_query(query)
        except Exception as exc:
            raise EmbeddingFailure(_describe(exc)) from exc
        self._check_dimension(vector)
        return vector

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _embed_batch(self, batch: list[str]) -> list[list[float]]:
        try:
            vectors = self.provider.embed_texts(batch)
        except Exception as exc:
            raise EmbeddingFailure(_describe(exc)) from exc

        if len(vectors) != len(batch):
            raise EmbeddingFailure(
                f"provider returned {len(vectors)} vectors for {len(batch)} texts"
            )
        for vector in vectors:
            self._check_dimension(vector)
        return vectors

    def _check_dimension(self, vector: list[float]) -> None:
        if len(vector) != self.dimension:
            raise EmbeddingFailure(
                f"expected {self.dimension}-dimensional vector, got {len(vector)}"
            )


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__
