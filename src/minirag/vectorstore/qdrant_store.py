"""Qdrant vector store — server, cloud, embedded or in-memory.

Requires the ``qdrant`` extra.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any

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

_SCROLL_PAGE = 256


class QdrantStore(VectorStore):
    """Qdrant-backed vector store using cosine distance."""

    def __init__(
        self,
        collection_name: str = "documents",
        dimension: int = 768,
        url: str | None = None,
        api_key: str | None = None,
        path: str | None = None,
        timeout: int | None = None,
    ):
        try:
            from qdrant_client import QdrantClient, models
        except ImportError as exc:
            raise ImportError(
                "qdrant-client required: pip install mini-rag[qdrant]"
            ) from exc

        self._models = models
        self._collection_name = collection_name
        self._dimension = dimension

        if url:
            self._client = QdrantClient(url=url, api_key=api_key, timeout=timeout)
        elif path:
            self._client = QdrantClient(path=path)
        else:
            # In-memory for testing
            self._client = QdrantClient(":memory:")

        if not self._client.collection_exists(collection_name):
            self._create_collection()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, records: list[VectorRecord]) -> int:
        if not records:
            return 0

        self._client.upsert(
            collection_name=self._collection_name, points=self._points(records), wait=True,
        )
        logger.info("QdrantStore added %d records", len(records))
        return len(records)

    def search(self, query_embedding: list[float], top_k: int = 10) -> list[SearchResult]:
        response = self._client.query_points(
            collection_name=self._collection_name,
            query=query_embedding,
            limit=top_k,
            with_payload=True,
        )

        results: list[SearchResult] = []
        for point in response.points:
            payload = point.payload or {}
            results.append(SearchResult(
                id=int(point.id),
                content=payload.get("content", ""),
                similarity=point.score if point.score is not None else 0.0,
                metadata=payload_to_metadata(payload),
            ))
        return results

    def count(self) -> int:
        return self._client.count(self._collection_name, exact=True).count

    def clear(self) -> None:
        self._client.delete_collection(self._collection_name)
        self._create_collection()

    def list_sources(self) -> list[SourceSummary]:
        rows = []
        for point in self._scroll():
            payload = point.payload or {}
            rows.append((
                payload_to_metadata(payload),
                datetime.fromisoformat(payload["created_at"]),
            ))
        return summarize_sources(rows)

    def delete_source(self, source: str) -> int:
        source_filter = self._source_filter(source)
        existing = self._client.count(
            self._collection_name, count_filter=source_filter, exact=True,
        ).count
        if existing == 0:
            return 0

        self._client.delete(
            collection_name=self._collection_name,
            points_selector=self._models.FilterSelector(filter=source_filter),
            wait=True,
        )
        logger.info("QdrantStore deleted %d records of source %s", existing, source)
        return existing

    def replace_source(self, source: str, records: list[VectorRecord]) -> int:
        old_ids = [
            point.id
            for point in self._scroll(self._source_filter(source), with_payload=False)
        ]
        if records:
            # Fresh ids; old points are dropped only after the upsert lands
            self._client.upsert(
                collection_name=self._collection_name, points=self._points(records), wait=True,
            )
        if old_ids:
            self._client.delete(
                collection_name=self._collection_name,
                points_selector=self._models.PointIdsList(points=old_ids),
                wait=True,
            )
        logger.info(
            "QdrantStore replaced %d records of source %s with %d",
            len(old_ids), source, len(records),
        )
        return len(old_ids)

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _create_collection(self) -> None:
        self._client.create_collection(
            collection_name=self._collection_name,
            vectors_config=self._models.VectorParams(
                size=self._dimension,
                distance=self._models.Distance.COSINE,
            ),
        )
        logger.info(
            "Created Qdrant collection '%s' (dim=%d)", self._collection_name, self._dimension,
        )

    def _source_filter(self, source: str) -> Any:
        return self._models.Filter(must=[
            self._models.FieldCondition(
                key="source",
                match=self._models.MatchValue(value=source),
            ),
        ])

    def _points(self, records: list[VectorRecord]) -> list[Any]:
        points = []
        for record in records:
            # Qdrant accepts unsigned 64-bit integer ids
            record.id = uuid.uuid4().int >> 64
            payload = metadata_to_payload(record.metadata)
            payload["content"] = record.content
            payload["created_at"] = record.created_at.isoformat()
            points.append(self._models.PointStruct(
                id=record.id,
                vector=record.embedding,
                payload=payload,
            ))
        return points

    def _scroll(self, scroll_filter: Any = None, with_payload: bool = True):
        offset = None
        while True:
            points, offset = self._client.scroll(
                collection_name=self._collection_name,
                scroll_filter=scroll_filter,
                limit=_SCROLL_PAGE,
                offset=offset,
                with_payload=with_payload,
                with_vectors=False,
            )
            yield from points
            if offset is None:
                break
