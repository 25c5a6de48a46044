"""Cohere rerank provider — hosted rerank API over plain HTTP.

Needs an API key via ``api_key`` or the ``COHERE_API_KEY`` env var.
"""

from __future__ import annotations

import logging
import os

import httpx

from minirag.reranking.base import RerankProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "rerank-v3.5"
DEFAULT_BASE_URL = "https://api.cohere.com"


class CohereRerankProvider(RerankProvider):
    """Score passages via Cohere's ``/v2/rerank`` endpoint."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        key = api_key or os.getenv("COHERE_API_KEY")
        if not key:
            raise ValueError("Cohere API key required (api_key or COHERE_API_KEY)")

        self.model = model
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Authorization": f"Bearer {key}"},
        )

    def score(self, query: str, passages: list[str]) -> list[float]:
        if not passages:
            return []

        resp = self._client.post(
            "/v2/rerank",
            json={
                "model": self.model,
                "query": query,
                "documents": passages,
                "top_n": len(passages),
            },
        )
        resp.raise_for_status()
        results = resp.json().get("results", [])

        # Results come back sorted by relevance; map them back by index
        scores: list[float | None] = [None] * len(passages)
        for item in results:
            scores[item["index"]] = float(item["relevance_score"])
        if any(s is None for s in scores):
            raise ValueError(
                f"Cohere returned {len(results)} scores for {len(passages)} passages"
            )
        return scores

    def close(self) -> None:
        self._client.close()
