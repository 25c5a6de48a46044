"""Ingestion pipeline — text → chunk → embed → store.

Stages run strictly in order and the first failure aborts the run. Nothing
is written to the store unless every chunk was embedded.
"""

from __future__ import annotations

import logging
import time
from typing import Literal

from minirag.chunking.base import BaseChunker
from minirag.chunking.window_chunker import WindowChunker
from minirag.embeddings.embedder import Embedder
from minirag.errors import EmbeddingFailure, IngestionError, ValidationError
from minirag.pipeline.schemas import IngestResult
from minirag.usage import UsageAccountant
from minirag.vectorstore.base import VectorStore
from minirag.vectorstore.schemas import VectorRecord

logger = logging.getLogger(__name__)

ReingestPolicy = Literal["append", "replace"]

MAX_TEXT_CHARS = 10 * 1024 * 1024


class IngestPipeline:
    """Orchestrates document ingestion: chunk → embed → upsert.

    ``reingest_policy`` decides what happens when a source is ingested
    again: ``append`` keeps the earlier chunks (duplicates accumulate),
    ``replace`` swaps them for the new chunks in a single store call, so a
    failed upsert leaves the earlier chunks in place.
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        chunker: BaseChunker | None = None,
        accountant: UsageAccountant | None = None,
        reingest_policy: ReingestPolicy = "append",
        max_text_chars: int = MAX_TEXT_CHARS,
    ):
        if reingest_policy not in ("append", "replace"):
            raise ValidationError(f"Unknown reingest policy '{reingest_policy}'")
        self.embedder = embedder
        self.vector_store = vector_store
        self.chunker = chunker or WindowChunker()
        self.accountant = accountant or UsageAccountant()
        self.reingest_policy = reingest_policy
        self.max_text_chars = max_text_chars

    def ingest_text(
        self,
        text: str,
        source: str,
        title: str | None = None,
        chunk_size: int | None = None,
        overlap: int | None = None,
    ) -> IngestResult:
        """Chunk, embed and store one document.

        Args:
            text: Raw document text.
            source: Document identifier stored with every chunk.
            title: Optional human-readable title.
            chunk_size: Overrides the chunker's window size for this call.
            overlap: Overrides the chunker's overlap for this call.

        Returns:
            An ``IngestResult`` with chunk count, token and cost estimates.

        Raises:
            ValidationError: Missing text/source, text too long, bad chunk
                options, or no valid chunks.
            IngestionError: Embedding or storing failed; ``stage`` says which.
        """
        started = time.perf_counter()

        if not source or not source.strip():
            raise ValidationError("source is required")
        if not text:
            raise ValidationError("Document contains no text")
        if len(text) > self.max_text_chars:
            raise ValidationError(
                f"Document too large: {len(text)} chars (limit {self.max_text_chars})"
            )

        # Stage 1: chunking
        chunker = self._chunker_for(chunk_size, overlap)
        chunks = chunker.chunk(text, source=source, title=title)
        if not chunks:
            raise ValidationError("No valid chunks created from text")

        # Stage 2: embedding
        contents = [c.content for c in chunks]
        try:
            embeddings = self.embedder.embed(contents)
        except EmbeddingFailure as exc:
            raise IngestionError("embedding", str(exc)) from exc

        # Stage 3: upserting
        records = [
            VectorRecord(content=chunk.content, embedding=emb, metadata=chunk.metadata)
            for chunk, emb in zip(chunks, embeddings, strict=True)
        ]
        replaced = 0
        try:
            if self.reingest_policy == "replace":
                replaced = self.vector_store.replace_source(source, records)
                stored = len(records)
            else:
                stored = self.vector_store.add(records)
        except Exception as exc:
            raise IngestionError("upserting", str(exc) or exc.__class__.__name__) from exc
        if replaced:
            logger.warning("Replaced %d existing chunks of %s", replaced, source)

        total_tokens = sum(self.accountant.estimate_tokens(c) for c in contents)
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            "Ingested %s: %d chunks → %d stored (%d tokens, %d ms)",
            source, len(chunks), stored, total_tokens, elapsed_ms,
        )

        return IngestResult(
            source=source,
            chunks_created=len(chunks),
            total_tokens=total_tokens,
            estimated_cost=self.accountant.estimate_embedding_cost(total_tokens),
            processing_time_ms=elapsed_ms,
            replaced=replaced,
        )

    def _chunker_for(self, chunk_size: int | None, overlap: int | None) -> BaseChunker:
        if chunk_size is None and overlap is None:
            return self.chunker
        base = self.chunker if isinstance(self.chunker, WindowChunker) else WindowChunker()
        return WindowChunker(
            chunk_size=chunk_size if chunk_size is not None else base.chunk_size,
            overlap=overlap if overlap is not None else base.overlap,
        )
