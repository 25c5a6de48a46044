"""Tests for vector stores — FAISS always, Qdrant in-memory when installed."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from minirag.chunking.schemas import ChunkMetadata
from minirag.vectorstore.base import VectorStore
from minirag.vectorstore.factory import available_stores, clear_cache, get_vector_store
from minirag.vectorstore.faiss_store import FAISSStore
from minirag.vectorstore.schemas import (
    VectorRecord,
    metadata_to_payload,
    payload_to_metadata,
    summarize_sources,
)

DIM = 8
T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _unit(i: int) -> list[float]:
    vec = np.zeros(DIM, dtype=np.float32)
    vec[i % DIM] = 1.0
    return vec.tolist()


def _records(
    source: str,
    n: int,
    offset: int = 0,
    created_at: datetime = T0,
    title: str | None = None,
) -> list[VectorRecord]:
    return [
        VectorRecord(
            content=f"{source} chunk {i}",
            embedding=_unit(offset + i),
            metadata=ChunkMetadata(source=source, position=i, title=title),
            created_at=created_at,
        )
        for i in range(n)
    ]


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------


class StoreContract:
    """Behaviour every backend must share; subclasses provide ``store``."""

    def test_empty_store(self, store: VectorStore):
        assert store.count() == 0
        assert store.search(_unit(0), top_k=5) == []
        assert store.list_sources() == []

    def test_add_assigns_ids(self, store: VectorStore):
        records = _records("a.txt", 3)
        assert store.add(records) == 3
        ids = [r.id for r in records]
        assert all(isinstance(i, int) for i in ids)
        assert len(set(ids)) == 3
        assert store.count() == 3

    def test_add_empty(self, store: VectorStore):
        assert store.add([]) == 0

    def test_search_orders_by_similarity(self, store: VectorStore):
        store.add(_records("a.txt", 4))
        results = store.search(_unit(2), top_k=2)
        assert len(results) == 2
        assert results[0].content == "a.txt chunk 2"
        assert results[0].similarity == pytest.approx(1.0, abs=1e-5)
        assert results[0].similarity >= results[1].similarity

    def test_search_top_k_larger_than_store(self, store: VectorStore):
        store.add(_records("a.txt", 2))
        assert len(store.search(_unit(0), top_k=10)) == 2

    def test_search_returns_metadata(self, store: VectorStore):
        store.add(_records("a.txt", 1, title="Doc A"))
        result = store.search(_unit(0), top_k=1)[0]
        assert result.metadata.source == "a.txt"
        assert result.metadata.title == "Doc A"
        assert result.metadata.position == 0

    def test_insert_only(self, store: VectorStore):
        store.add(_records("a.txt", 2))
        store.add(_records("a.txt", 2))
        assert store.count() == 4

    def test_clear(self, store: VectorStore):
        store.add(_records("a.txt", 3))
        store.clear()
        assert store.count() == 0
        assert store.search(_unit(0)) == []

    def test_list_sources(self, store: VectorStore):
        store.add(_records("old.txt", 2, created_at=T0, title="Old"))
        store.add(_records("new.txt", 3, offset=2, created_at=T0 + timedelta(hours=1)))

        summaries = store.list_sources()

        assert [s.source for s in summaries] == ["new.txt", "old.txt"]
        assert summaries[0].chunk_count == 3
        assert summaries[1].title == "Old"
        assert summaries[1].first_seen == T0

    def test_delete_source(self, store: VectorStore):
        store.add(_records("a.txt", 2))
        store.add(_records("b.txt", 3, offset=2))

        assert store.delete_source("a.txt") == 2
        assert store.count() == 3
        assert {r.metadata.source for r in store.search(_unit(0), top_k=10)} == {"b.txt"}

    def test_delete_unknown_source(self, store: VectorStore):
        store.add(_records("a.txt", 2))
        assert store.delete_source("missing.txt") == 0
        assert store.count() == 2

    def test_replace_source(self, store: VectorStore):
        store.add(_records("a.txt", 2))
        store.add(_records("b.txt", 3, offset=2))
        fresh = _records("a.txt", 1, offset=5)

        assert store.replace_source("a.txt", fresh) == 2
        assert store.count() == 4
        contents = {r.content for r in store.search(_unit(0), top_k=10)}
        assert "a.txt chunk 0" in contents
        assert "a.txt chunk 1" not in contents
        assert isinstance(fresh[0].id, int)

    def test_replace_unknown_source_adds(self, store: VectorStore):
        store.add(_records("a.txt", 2))
        assert store.replace_source("new.txt", _records("new.txt", 1, offset=3)) == 0
        assert store.count() == 3


class TestFAISSStore(StoreContract):
    @pytest.fixture
    def store(self) -> FAISSStore:
        return FAISSStore(dimension=DIM)

    def test_ids_increase(self, store: FAISSStore):
        first = _records("a.txt", 2)
        second = _records("b.txt", 2)
        store.add(first)
        store.add(second)
        assert [r.id for r in first + second] == [1, 2, 3, 4]

    def test_ids_survive_delete(self, store: FAISSStore):
        store.add(_records("a.txt", 1))
        kept = _records("b.txt", 1, offset=1)
        store.add(kept)
        store.delete_source("a.txt")
        assert store.search(_unit(1), top_k=1)[0].id == kept[0].id

    def test_unnormalized_vectors(self, store: FAISSStore):
        record = VectorRecord(
            content="big", embedding=[3.0] + [0.0] * (DIM - 1),
            metadata=ChunkMetadata(source="a"),
        )
        store.add([record])
        assert store.search(_unit(0), top_k=1)[0].similarity == pytest.approx(1.0, abs=1e-5)

    def test_dimension_mismatch(self, store: FAISSStore):
        bad = VectorRecord(content="x", embedding=[1.0, 0.0], metadata=ChunkMetadata(source="a"))
        with pytest.raises(ValueError, match="dimension"):
            store.add([bad])

    def test_save_and_load(self, store: FAISSStore, tmp_path):
        store.add(_records("a.txt", 3, title="Doc"))
        store.save(str(tmp_path))

        restored = FAISSStore(dimension=DIM)
        restored.load(str(tmp_path))

        assert restored.count() == 3
        top = restored.search(_unit(1), top_k=1)[0]
        assert top.content == "a.txt chunk 1"
        assert top.metadata.title == "Doc"
        assert restored.list_sources()[0].first_seen == T0

    def test_ids_continue_after_load(self, store: FAISSStore, tmp_path):
        store.add(_records("a.txt", 2))
        store.save(str(tmp_path))

        restored = FAISSStore(dimension=DIM)
        restored.load(str(tmp_path))
        more = _records("b.txt", 1)
        restored.add(more)
        assert more[0].id == 3

    def test_write_through_path(self, tmp_path):
        path = str(tmp_path / "store")
        FAISSStore(dimension=DIM, path=path).add(_records("a.txt", 2))

        reopened = FAISSStore(dimension=DIM, path=path)
        assert reopened.count() == 2

        reopened.delete_source("a.txt")
        assert FAISSStore(dimension=DIM, path=path).count() == 0

    def test_load_dimension_mismatch(self, store: FAISSStore, tmp_path):
        store.add(_records("a.txt", 1))
        store.save(str(tmp_path))
        with pytest.raises(ValueError, match="dimension"):
            FAISSStore(dimension=DIM * 2).load(str(tmp_path))

    def test_failed_replace_keeps_old_records(self, store: FAISSStore):
        old = _records("a.txt", 2)
        store.add(old)
        bad = VectorRecord(content="x", embedding=[1.0, 0.0], metadata=ChunkMetadata(source="a.txt"))

        with pytest.raises(ValueError, match="dimension"):
            store.replace_source("a.txt", [bad])

        assert store.count() == 2
        assert store.search(_unit(1), top_k=1)[0].id == old[1].id
        assert bad.id is None

    def test_replace_ids_continue(self, store: FAISSStore):
        store.add(_records("a.txt", 2))
        fresh = _records("a.txt", 2, offset=2)
        store.replace_source("a.txt", fresh)
        assert [r.id for r in fresh] == [3, 4]


class TestQdrantStore(StoreContract):
    @pytest.fixture
    def store(self):
        pytest.importorskip("qdrant_client")
        from minirag.vectorstore.qdrant_store import QdrantStore

        return QdrantStore(collection_name="test", dimension=DIM)


# ---------------------------------------------------------------------------
# Schemas and factory
# ---------------------------------------------------------------------------


class TestSchemas:
    def test_payload_round_trip(self):
        meta = ChunkMetadata(
            source="a.txt", position=3, chunk_size=100, overlap=10, start_offset=270, title="A",
        )
        assert payload_to_metadata(metadata_to_payload(meta)) == meta

    def test_payload_without_source(self):
        with pytest.raises(ValueError, match="source"):
            payload_to_metadata({"position": 1})

    def test_summarize_keeps_earliest(self):
        meta = ChunkMetadata(source="a.txt")
        later = T0 + timedelta(minutes=5)
        [summary] = summarize_sources([(meta, later), (meta, T0)])
        assert summary.first_seen == T0
        assert summary.chunk_count == 2


class TestVectorStoreFactory:
    def setup_method(self):
        clear_cache()

    def test_available_stores(self):
        assert available_stores() == ["faiss", "qdrant"]

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown vector store"):
            get_vector_store("pinecone")

    def test_faiss_with_kwargs(self):
        store = get_vector_store("faiss", dimension=DIM)
        assert isinstance(store, FAISSStore)
        assert store.store_name() == "FAISSStore"

    def test_cache_without_kwargs(self):
        assert get_vector_store("faiss") is get_vector_store("faiss")
