"""Exception hierarchy shared by every pipeline stage."""

from __future__ import annotations


class RAGError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(RAGError, ValueError):
    """Bad input or configuration, rejected before any external call."""


class ProviderError(RAGError):
    """An external call (embedding, store, rerank, LLM) failed or timed out."""

    stage = "provider"

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class EmbeddingFailure(ProviderError):
    stage = "embedding"


class StoreError(ProviderError):
    stage = "vector store"


class RerankFailure(ProviderError):
    stage = "reranking"


class SynthesisFailure(ProviderError):
    stage = "synthesis"


class IngestionError(RAGError):
    """Ingestion aborted; ``stage`` names the step that failed."""

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage
