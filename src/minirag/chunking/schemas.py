"""Data models for chunks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkMetadata:
    """Metadata carried by each chunk — stored alongside embeddings."""

    source: str
    position: int = 0
    chunk_size: int = 0
    overlap: int = 0
    start_offset: int = 0
    title: str | None = None


@dataclass(frozen=True)
class Chunk:
    """A single retrievable slice of a document."""

    content: str
    metadata: ChunkMetadata

    @property
    def end_offset(self) -> int:
        return self.metadata.start_offset + len(self.content)
