"""Fixed-size sliding-window chunker.

Windows are measured in characters. Each window after the first repeats
the trailing ``overlap`` characters of the previous one, so the windows
cover the whole text with no gaps.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from minirag.chunking.base import BaseChunker
from minirag.chunking.schemas import Chunk, ChunkMetadata
from minirag.errors import ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1000
OVERLAP = 200


class WindowChunker(BaseChunker):
    """Split text into overlapping windows of ``chunk_size`` characters."""

    def __init__(self, chunk_size: int = CHUNK_SIZE, overlap: int = OVERLAP):
        if chunk_size <= 0:
            raise ValidationError(f"chunk_size must be positive, got {chunk_size}")
        if overlap < 0:
            raise ValidationError(f"overlap must be >= 0, got {overlap}")
        if overlap >= chunk_size:
            raise ValidationError(
                f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.overlap = overlap

    @property
    def step(self) -> int:
        return self.chunk_size - self.overlap

    def chunk(self, text: str, source: str, title: str | None = None) -> list[Chunk]:
        if not text.strip():
            return []

        chunks: list[Chunk] = []
        start = 0
        while True:
            end = min(start + self.chunk_size, len(text))
            window = text[start:end]

            # Whitespace-only windows carry nothing worth embedding
            if window.strip():
                chunks.append(Chunk(
                    content=window,
                    metadata=ChunkMetadata(
                        source=source,
                        title=title,
                        position=len(chunks),
                        chunk_size=self.chunk_size,
                        overlap=self.overlap,
                        start_offset=start,
                    ),
                ))

            if end == len(text):
                break
            start += self.step

        logger.info(
            "WindowChunker produced %d chunks from %d chars (size=%d, overlap=%d)",
            len(chunks), len(text), self.chunk_size, self.overlap,
        )
        return chunks


def reconstruct_text(chunks: Sequence[Chunk]) -> str:
    """Rebuild the original text from consecutive chunks of one source.

    Overlapping prefixes are removed using each chunk's ``start_offset``.

    Raises:
        ValueError: If the chunks leave a gap (e.g. a dropped
            whitespace-only window).
    """
    text = ""
    for chunk in sorted(chunks, key=lambda c: c.metadata.position):
        start = chunk.metadata.start_offset
        if start > len(text):
            raise ValueError(
                f"gap before chunk {chunk.metadata.position}: "
                f"expected offset <= {len(text)}, got {start}"
            )
        text += chunk.content[len(text) - start:]
    return text
