"""Tests for the Typer CLI — pipelines are patched out."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from minirag.cli import app
from minirag.errors import IngestionError
from minirag.pipeline.schemas import Citation, IngestResult, PipelineTiming, QueryResponse
from minirag.usage import UsageStats

runner = CliRunner()


def _ingest_pipeline() -> MagicMock:
    pipeline = MagicMock()
    pipeline.ingest_text.return_value = IngestResult(
        source="sky.txt",
        chunks_created=2,
        total_tokens=9,
        estimated_cost=0.0000002,
        processing_time_ms=5,
    )
    return pipeline


class TestStatus:
    def test_lists_components(self):
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "ollama" in result.output
        assert "faiss" in result.output
        assert "cohere" in result.output


class TestIngest:
    def test_ingest_text(self):
        pipeline = _ingest_pipeline()
        with patch("minirag.pipeline.builder.build_ingest_pipeline", return_value=pipeline):
            result = runner.invoke(
                app, ["ingest", "--text", "The sky is blue.", "--source", "sky.txt"],
            )

        assert result.exit_code == 0, result.output
        assert "Chunks: 2" in result.output
        pipeline.ingest_text.assert_called_once_with(
            "The sky is blue.", source="sky.txt", title=None, chunk_size=None, overlap=None,
        )

    def test_ingest_file_uses_file_name(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("Grass is green.", encoding="utf-8")
        pipeline = _ingest_pipeline()
        with patch("minirag.pipeline.builder.build_ingest_pipeline", return_value=pipeline):
            result = runner.invoke(app, ["ingest", str(path), "--chunk-size", "20", "--overlap", "5"])

        assert result.exit_code == 0, result.output
        pipeline.ingest_text.assert_called_once_with(
            "Grass is green.", source="notes.txt", title=None, chunk_size=20, overlap=5,
        )

    def test_text_requires_source(self):
        result = runner.invoke(app, ["ingest", "--text", "orphan text"])
        assert result.exit_code != 0

    def test_ingestion_failure_exits_nonzero(self):
        pipeline = _ingest_pipeline()
        pipeline.ingest_text.side_effect = IngestionError("embedding", "offline")
        with patch("minirag.pipeline.builder.build_ingest_pipeline", return_value=pipeline):
            result = runner.invoke(app, ["ingest", "--text", "abc", "--source", "a.txt"])

        assert result.exit_code == 1
        assert "embedding failed: offline" in result.output


class TestQuery:
    def test_prints_answer_and_sources(self):
        pipeline = MagicMock()
        pipeline.query.return_value = QueryResponse(
            question="What color is the sky?",
            answer="Blue [1].",
            citations=[Citation(1, "The sky is blue.", "sky.txt", 0, 0.9)],
            timing=PipelineTiming(1, 2, 3, 6),
            usage=UsageStats(10, 2, 12, 0.0000027),
            model="mock-llm",
        )
        with patch("minirag.pipeline.builder.build_query_pipeline", return_value=pipeline):
            result = runner.invoke(app, ["query", "What color is the sky?", "-k", "4"])

        assert result.exit_code == 0, result.output
        assert "Blue [1]." in result.output
        assert "sky.txt" in result.output
        pipeline.query.assert_called_once_with(
            "What color is the sky?", top_k=4, citation_limit=None,
        )

    def test_error_exits_nonzero(self):
        pipeline = MagicMock()
        pipeline.query.return_value = QueryResponse(
            question="q", answer="Error: reranking failed: boom", error="reranking failed: boom",
        )
        with patch("minirag.pipeline.builder.build_query_pipeline", return_value=pipeline):
            result = runner.invoke(app, ["query", "q"])

        assert result.exit_code == 1
        assert "reranking failed: boom" in result.output


class TestStoreCommands:
    def _embedder(self, dimension: int = 384) -> MagicMock:
        embedder = MagicMock()
        embedder.dimension = dimension
        return embedder

    def test_sources_opens_store_at_model_dimension(self):
        store = MagicMock()
        store.count.return_value = 0
        store.list_sources.return_value = []
        with (
            patch("minirag.pipeline.builder.build_embedder", return_value=self._embedder()),
            patch("minirag.pipeline.builder.build_vector_store", return_value=store) as build,
        ):
            result = runner.invoke(app, ["sources"])

        assert result.exit_code == 0, result.output
        assert build.call_args.args[1] == 384

    def test_clear_opens_store_at_model_dimension(self):
        store = MagicMock()
        with (
            patch("minirag.pipeline.builder.build_embedder", return_value=self._embedder(1024)),
            patch("minirag.pipeline.builder.build_vector_store", return_value=store) as build,
        ):
            result = runner.invoke(app, ["clear", "--yes"])

        assert result.exit_code == 0, result.output
        assert build.call_args.args[1] == 1024
        store.clear.assert_called_once()
