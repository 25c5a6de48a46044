"""Reranker — second-pass relevance scoring of retrieved candidates.

Candidates are scored jointly with the raw query by a ``RerankProvider``
(a cross-encoder style model, distinct from the embedding model) and sorted
by that score. Ties keep their retrieval order.
"""

from __future__ import annotations

import logging
import math

from minirag.errors import RerankFailure
from minirag.reranking.base import RerankProvider
from minirag.retrieval.schemas import RerankedResult, RerankOutcome
from minirag.vectorstore.schemas import SearchResult

logger = logging.getLogger(__name__)


class Reranker:
    """Re-score and re-sort search results, optionally dropping weak ones."""

    def __init__(self, provider: RerankProvider, threshold: float | None = None):
        self.provider = provider
        self.threshold = threshold

    def rerank(self, query: str, candidates: list[SearchResult]) -> RerankOutcome:
        """Score ``candidates`` against ``query`` and sort by score, descending.

        Args:
            query: The raw user question.
            candidates: Retrieval results in similarity order.

        Returns:
            A ``RerankOutcome``; ``dropped`` counts candidates scoring below
            the threshold.

        Raises:
            RerankFailure: The provider failed or returned malformed scores.
        """
        if not candidates:
            return RerankOutcome()

        try:
            scores = self.provider.score(query, [c.content for c in candidates])
        except Exception as exc:
            raise RerankFailure(str(exc) or exc.__class__.__name__) from exc

        if len(scores) != len(candidates):
            raise RerankFailure(
                f"provider returned {len(scores)} scores for {len(candidates)} candidates"
            )
        try:
            scores = [float(s) for s in scores]
        except (TypeError, ValueError) as exc:
            raise RerankFailure(f"provider returned non-numeric scores: {exc}") from exc
        if any(math.isnan(s) for s in scores):
            raise RerankFailure("provider returned NaN scores")

        reranked = [
            RerankedResult.from_search_result(candidate, score)
            for candidate, score in zip(candidates, scores, strict=True)
        ]
        # list.sort is stable, so equal scores keep retrieval order
        reranked.sort(key=lambda r: r.rerank_score, reverse=True)

        dropped = 0
        if self.threshold is not None:
            kept = [r for r in reranked if r.rerank_score >= self.threshold]
            dropped = len(reranked) - len(kept)
            reranked = kept
            if dropped:
                logger.warning(
                    "Reranker dropped %d of %d candidates below threshold %.3f",
                    dropped, len(candidates), self.threshold,
                )

        logger.info(
            "Reranked %d → %d results (provider=%s)",
            len(candidates), len(reranked), self.provider.provider_name(),
        )
        return RerankOutcome(results=reranked, dropped=dropped)
