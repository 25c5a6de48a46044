"""Query pipeline — question → retrieve → rerank → synthesize → cited answer.

This is the one place where stage failures become a user-facing envelope:
``query`` never raises, it returns a ``QueryResponse`` with ``error`` set and
zeroed timing and usage.
"""

from __future__ import annotations

import logging
import time

from minirag.errors import ProviderError, RAGError, ValidationError
from minirag.pipeline.schemas import PipelineTiming, QueryResponse
from minirag.pipeline.synthesizer import AnswerSynthesizer
from minirag.retrieval.reranker import Reranker
from minirag.retrieval.retriever import Retriever

logger = logging.getLogger(__name__)


class QueryPipeline:
    """Orchestrates Retrieving → Reranking → Synthesizing, one pass, no retries."""

    def __init__(
        self,
        retriever: Retriever,
        reranker: Reranker,
        synthesizer: AnswerSynthesizer,
        top_k: int = 10,
        citation_limit: int = 5,
    ):
        self.retriever = retriever
        self.reranker = reranker
        self.synthesizer = synthesizer
        self.top_k = top_k
        self.citation_limit = citation_limit

    def query(
        self,
        question: str,
        top_k: int | None = None,
        citation_limit: int | None = None,
    ) -> QueryResponse:
        """Answer ``question`` from the stored documents.

        Args:
            question: The natural-language question.
            top_k: Candidates to retrieve (defaults to the pipeline's).
            citation_limit: Chunks passed to the LLM (defaults to the pipeline's).

        Returns:
            A ``QueryResponse``. On failure ``error`` names the failed stage.
        """
        top_k = self.top_k if top_k is None else top_k
        citation_limit = self.citation_limit if citation_limit is None else citation_limit
        stage = "retrieval"
        started = time.perf_counter()

        try:
            if not question or not question.strip():
                raise ValidationError("Query is required")

            t0 = time.perf_counter()
            candidates = self.retriever.retrieve(question, top_k=top_k)
            retrieval_ms = _elapsed_ms(t0)

            stage = "reranking"
            t0 = time.perf_counter()
            outcome = self.reranker.rerank(question, candidates)
            rerank_ms = _elapsed_ms(t0)

            stage = "synthesis"
            t0 = time.perf_counter()
            synthesis = self.synthesizer.synthesize(
                question, outcome.results, citation_limit=citation_limit,
            )
            llm_ms = _elapsed_ms(t0)
        except Exception as exc:
            return self._error_response(question, stage, exc)

        timing = PipelineTiming(
            retrieval_ms=retrieval_ms,
            rerank_ms=rerank_ms,
            llm_ms=llm_ms,
            total_ms=_elapsed_ms(started),
        )

        logger.info(
            "Query answered: %d candidates, %d reranked (%d dropped), %d citations, %d ms",
            len(candidates), len(outcome.results), outcome.dropped,
            len(synthesis.citations), timing.total_ms,
        )

        return QueryResponse(
            question=question,
            answer=synthesis.answer,
            citations=synthesis.citations,
            timing=timing,
            usage=synthesis.usage,
            retrieval_count=len(candidates),
            dropped_count=outcome.dropped,
            model=synthesis.model,
        )

    @staticmethod
    def _error_response(question: str, stage: str, exc: Exception) -> QueryResponse:
        if isinstance(exc, ValidationError):
            message = str(exc)
            logger.info("Query rejected: %s", message)
        elif isinstance(exc, RAGError):
            if isinstance(exc, ProviderError):
                stage = exc.stage
            message = f"{stage} failed: {exc}"
            logger.error("Query failed during %s: %s", stage, exc)
        else:
            message = f"{stage} failed: {exc}"
            logger.exception("Unexpected error during %s", stage)

        return QueryResponse(question=question, answer=f"Error: {message}", error=message)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
