"""Local cross-encoder rerank provider.

Uses sentence-transformers cross-encoders. Requires the ``huggingface`` extra.
"""

from __future__ import annotations

import logging
from typing import Any

from minirag.reranking.base import RerankProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "cross-encoder/ms-marco-MiniLM-L-6-v2"


class CrossEncoderRerankProvider(RerankProvider):
    """Score query/passage pairs with a sentence-transformers ``CrossEncoder``."""

    def __init__(self, model: str = DEFAULT_MODEL, device: str | None = None, **_: Any):
        try:
            from sentence_transformers import CrossEncoder
        except ImportError as exc:
            raise ImportError(
                "sentence-transformers required: pip install mini-rag[huggingface]"
            ) from exc

        self._model: Any = CrossEncoder(model, device=device)
        self._model_name = model
        logger.info("Loaded reranker model: %s", model)

    def score(self, query: str, passages: list[str]) -> list[float]:
        if not passages:
            return []
        scores = self._model.predict([(query, p) for p in passages], show_progress_bar=False)
        return [float(s) for s in scores]
