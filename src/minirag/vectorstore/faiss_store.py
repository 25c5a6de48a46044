"""FAISS vector store — local, zero infrastructure.

Uses an exact inner-product index over L2-normalised vectors, so scores are
cosine similarities in [-1, 1]. A parallel row list keeps content, metadata
and the stable integer ids assigned on insert.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np

from minirag.vectorstore.base import VectorStore
from minirag.vectorstore.schemas import (
    SearchResult,
    SourceSummary,
    VectorRecord,
    metadata_to_payload,
    payload_to_metadata,
    summarize_sources,
)

logger = logging.getLogger(__name__)


class FAISSStore(VectorStore):
    """FAISS-backed vector store."""

    def __init__(self, dimension: int = 768, path: str | None = None):
        try:
            import faiss
        except ImportError as exc:
            raise ImportError("faiss-cpu required: pip install faiss-cpu") from exc

        self._faiss = faiss
        self._dimension = dimension
        self._index = faiss.IndexFlatIP(dimension)
        self._rows: list[VectorRecord] = []  # row i <-> FAISS vector i
        self._next_id = 1
        self._path = path

        if path and (Path(path) / "index.faiss").exists():
            self.load(path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, records: list[VectorRecord]) -> int:
        if not records:
            return 0

        vectors = self._as_matrix([r.embedding for r in records])
        self._index.add(vectors)

        for record, vector in zip(records, vectors, strict=True):
            record.id = self._next_id
            record.embedding = vector.tolist()
            self._next_id += 1
            self._rows.append(record)

        logger.info("FAISSStore added %d records (total: %d)", len(records), self.count())
        self._persist()
        return len(records)

    def search(self, query_embedding: list[float], top_k: int = 10) -> list[SearchResult]:
        if self._index.ntotal == 0:
            return []

        query_vec = self._as_matrix([query_embedding])
        fetch_k = min(top_k, self._index.ntotal)
        scores, indices = self._index.search(query_vec, fetch_k)

        results: list[SearchResult] = []
        for score, idx in zip(scores[0], indices[0], strict=True):
            if idx == -1:
                continue
            row = self._rows[int(idx)]
            results.append(SearchResult(
                id=row.id,
                content=row.content,
                similarity=float(score),
                metadata=row.metadata,
            ))
        return results

    def count(self) -> int:
        return self._index.ntotal

    def clear(self) -> None:
        self._index = self._faiss.IndexFlatIP(self._dimension)
        self._rows = []
        self._persist()

    def list_sources(self) -> list[SourceSummary]:
        return summarize_sources([(r.metadata, r.created_at) for r in self._rows])

    def delete_source(self, source: str) -> int:
        # IndexFlatIP has no native delete; rebuild from the kept rows
        kept = [r for r in self._rows if r.metadata.source != source]
        deleted = len(self._rows) - len(kept)
        if deleted == 0:
            return 0

        self._index = self._faiss.IndexFlatIP(self._dimension)
        if kept:
            self._index.add(np.array([r.embedding for r in kept], dtype=np.float32))
        self._rows = kept
        logger.info("FAISSStore deleted %d records of source %s", deleted, source)
        self._persist()
        return deleted

    def replace_source(self, source: str, records: list[VectorRecord]) -> int:
        kept = [r for r in self._rows if r.metadata.source != source]
        deleted = len(self._rows) - len(kept)

        # Build the new index aside; the live one is only swapped on success
        index = self._faiss.IndexFlatIP(self._dimension)
        if kept:
            index.add(np.array([r.embedding for r in kept], dtype=np.float32))
        vectors = self._as_matrix([r.embedding for r in records]) if records else None
        if vectors is not None:
            index.add(vectors)

            for record, vector in zip(records, vectors, strict=True):
                record.id = self._next_id
                record.embedding = vector.tolist()
                self._next_id += 1

        self._index = index
        self._rows = kept + list(records)
        logger.info(
            "FAISSStore replaced %d records of source %s with %d",
            deleted, source, len(records),
        )
        self._persist()
        return deleted

    def save(self, path: str) -> None:
        """Save FAISS index and row data to disk."""
        p = Path(path)
        p.mkdir(parents=True, exist_ok=True)

        self._faiss.write_index(self._index, str(p / "index.faiss"))

        rows: list[dict[str, Any]] = [
            {
                "id": r.id,
                "content": r.content,
                "metadata": metadata_to_payload(r.metadata),
                "created_at": r.created_at.isoformat(),
            }
            for r in self._rows
        ]
        with open(p / "rows.json", "w", encoding="utf-8") as f:
            json.dump({"rows": rows, "next_id": self._next_id}, f)

        logger.info("FAISSStore saved to %s (%d records)", path, self.count())

    def load(self, path: str) -> None:
        """Load FAISS index and row data from disk."""
        p = Path(path)

        index = self._faiss.read_index(str(p / "index.faiss"))
        if index.d != self._dimension:
            raise ValueError(
                f"index at {path} has dimension {index.d}, expected {self._dimension}"
            )

        with open(p / "rows.json", encoding="utf-8") as f:
            data = json.load(f)

        vectors = index.reconstruct_n(0, index.ntotal) if index.ntotal else []
        self._rows = [
            VectorRecord(
                id=row["id"],
                content=row["content"],
                embedding=vector.tolist(),
                metadata=payload_to_metadata(row["metadata"]),
                created_at=datetime.fromisoformat(row["created_at"]),
            )
            for row, vector in zip(data["rows"], vectors, strict=True)
        ]
        self._index = index
        self._next_id = data.get("next_id", len(self._rows) + 1)
        logger.info("FAISSStore loaded from %s (%d records)", path, self.count())

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _as_matrix(self, vectors: list[list[float]]) -> np.ndarray:
        matrix = np.array(vectors, dtype=np.float32)
        if matrix.ndim != 2 or matrix.shape[1] != self._dimension:
            raise ValueError(
                f"expected vectors of dimension {self._dimension}, got shape {matrix.shape}"
            )
        # L2-normalize for cosine similarity via inner product
        self._faiss.normalize_L2(matrix)
        return matrix

    def _persist(self) -> None:
        """Write through to disk when the store was opened with a path."""
        if self._path:
            self.save(self._path)
