"""Data models for the RAG pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from minirag.usage import UsageStats


@dataclass(frozen=True)
class Citation:
    """A numbered reference from the answer back to one context chunk."""

    index: int
    content: str
    source: str
    position: int
    rerank_score: float
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "content": self.content,
            "source": self.source,
            "title": self.title,
            "position": self.position,
            "rerankScore": self.rerank_score,
        }


@dataclass(frozen=True)
class PipelineTiming:
    """Wall-clock milliseconds spent in each query stage."""

    retrieval_ms: int = 0
    rerank_ms: int = 0
    llm_ms: int = 0
    total_ms: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "retrievalMs": self.retrieval_ms,
            "rerankMs": self.rerank_ms,
            "llmMs": self.llm_ms,
            "totalMs": self.total_ms,
        }


@dataclass
class SynthesisResult:
    """Output of the answer synthesizer."""

    answer: str
    citations: list[Citation] = field(default_factory=list)
    usage: UsageStats = field(default_factory=UsageStats)
    model: str = ""


@dataclass
class QueryResponse:
    """Output of the query pipeline.

    ``error`` is set when a stage failed; timing and usage are then zero.
    """

    question: str
    answer: str
    citations: list[Citation] = field(default_factory=list)
    timing: PipelineTiming = field(default_factory=PipelineTiming)
    usage: UsageStats = field(default_factory=UsageStats)
    retrieval_count: int = 0
    dropped_count: int = 0
    model: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape consumed by the UI."""
        return {
            "answer": self.answer,
            "citations": [c.to_dict() for c in self.citations],
            "timing": self.timing.to_dict(),
            "usage": usage_to_dict(self.usage),
        }


@dataclass
class IngestResult:
    """Result of document ingestion."""

    source: str
    chunks_created: int
    total_tokens: int
    estimated_cost: float
    processing_time_ms: int
    replaced: int = 0

    def stats(self) -> dict[str, Any]:
        return {
            "chunksCreated": self.chunks_created,
            "totalTokens": self.total_tokens,
            "estimatedCost": self.estimated_cost,
            "processingTime": self.processing_time_ms,
        }


def usage_to_dict(usage: UsageStats) -> dict[str, Any]:
    return {
        "promptTokens": usage.prompt_tokens,
        "completionTokens": usage.completion_tokens,
        "totalTokens": usage.total_tokens,
        "estimatedCost": usage.estimated_cost,
    }
