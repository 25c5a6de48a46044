"""Data models for vector store operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from minirag.chunking.schemas import ChunkMetadata


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class VectorRecord:
    """A document chunk with its embedding, ready for storage.

    ``id`` is assigned by the store on insert.
    """

    content: str
    embedding: list[float]
    metadata: ChunkMetadata
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SearchResult:
    """A single search result from the vector store."""

    id: int
    content: str
    similarity: float
    metadata: ChunkMetadata


@dataclass(frozen=True)
class SourceSummary:
    """Per-source aggregate returned by ``VectorStore.list_sources``."""

    source: str
    chunk_count: int
    first_seen: datetime
    title: str | None = None


def metadata_to_payload(meta: ChunkMetadata) -> dict[str, Any]:
    """Flatten chunk metadata for JSON / payload storage."""
    return {
        "source": meta.source,
        "title": meta.title,
        "position": meta.position,
        "chunk_size": meta.chunk_size,
        "overlap": meta.overlap,
        "start_offset": meta.start_offset,
    }


def payload_to_metadata(payload: dict[str, Any]) -> ChunkMetadata:
    """Inverse of ``metadata_to_payload``; fails fast on a missing source."""
    if "source" not in payload:
        raise ValueError(f"stored payload has no 'source' field: {sorted(payload)}")
    return ChunkMetadata(
        source=payload["source"],
        title=payload.get("title"),
        position=int(payload.get("position", 0)),
        chunk_size=int(payload.get("chunk_size", 0)),
        overlap=int(payload.get("overlap", 0)),
        start_offset=int(payload.get("start_offset", 0)),
    )


def summarize_sources(rows: list[tuple[ChunkMetadata, datetime]]) -> list[SourceSummary]:
    """Group ``(metadata, created_at)`` rows by source.

    Keeps the first title seen and the earliest timestamp; sorted with the
    most recently first-seen source first.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for meta, created_at in rows:
        entry = grouped.get(meta.source)
        if entry is None:
            grouped[meta.source] = {
                "title": meta.title,
                "chunk_count": 1,
                "first_seen": created_at,
            }
            continue
        entry["chunk_count"] += 1
        if created_at < entry["first_seen"]:
            entry["first_seen"] = created_at

    summaries = [
        SourceSummary(source=source, **entry) for source, entry in grouped.items()
    ]
    summaries.sort(key=lambda s: s.first_seen, reverse=True)
    return summaries
