"""Data models for retrieval and reranking."""

from __future__ import annotations

from dataclasses import dataclass, field

from minirag.chunking.schemas import ChunkMetadata
from minirag.vectorstore.schemas import SearchResult


@dataclass(frozen=True)
class RerankedResult:
    """A search result re-scored against the raw query."""

    id: int
    content: str
    similarity: float
    rerank_score: float
    metadata: ChunkMetadata

    @classmethod
    def from_search_result(cls, result: SearchResult, score: float) -> RerankedResult:
        return cls(
            id=result.id,
            content=result.content,
            similarity=result.similarity,
            rerank_score=score,
            metadata=result.metadata,
        )


@dataclass
class RerankOutcome:
    """Reranked results plus the number of candidates dropped by the threshold."""

    results: list[RerankedResult] = field(default_factory=list)
    dropped: int = 0
