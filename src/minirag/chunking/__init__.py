"""Sliding-window document chunking."""

from minirag.chunking.base import BaseChunker
from minirag.chunking.schemas import Chunk, ChunkMetadata
from minirag.chunking.window_chunker import WindowChunker, reconstruct_text

__all__ = ["BaseChunker", "Chunk", "ChunkMetadata", "WindowChunker", "reconstruct_text"]
