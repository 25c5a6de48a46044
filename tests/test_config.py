"""Tests for settings loading and validation."""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError as PydanticValidationError

from minirag.config import ChunkingSettings, Settings, load_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.chunking.chunk_size == 1000
        assert settings.chunking.overlap == 200
        assert settings.retrieval.top_k == 10
        assert settings.retrieval.citation_limit == 5
        assert settings.ingestion.reingest_policy == "append"
        assert settings.vectorstore.backend == "faiss"

    def test_overlap_must_be_smaller(self):
        with pytest.raises(PydanticValidationError, match="overlap"):
            ChunkingSettings(chunk_size=100, overlap=100)

    def test_non_positive_chunk_size(self):
        with pytest.raises(PydanticValidationError):
            ChunkingSettings(chunk_size=0, overlap=0)

    def test_unknown_policy(self):
        with pytest.raises(PydanticValidationError):
            Settings(ingestion={"reingest_policy": "merge"})


class TestLoadSettings:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({
            "embedding": {"provider": "openai", "model": "text-embedding-3-small", "dimension": 1536},
            "chunking": {"chunk_size": 500, "overlap": 50},
            "reranker": {"threshold": 0.2},
        }))

        settings = load_settings(path)

        assert settings.embedding.provider == "openai"
        assert settings.embedding.dimension == 1536
        assert settings.chunking.chunk_size == 500
        assert settings.reranker.threshold == 0.2
        assert settings.llm.provider == "ollama"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_no_file_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MINIRAG_PROFILE", raising=False)
        assert load_settings() == Settings()

    def test_profile_file_preferred(self, tmp_path, monkeypatch):
        (tmp_path / "settings.yaml").write_text(yaml.safe_dump({"retrieval": {"top_k": 3}}))
        (tmp_path / "settings-prod.yaml").write_text(yaml.safe_dump({"retrieval": {"top_k": 7}}))
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MINIRAG_PROFILE", "prod")

        assert load_settings().retrieval.top_k == 7

    def test_invalid_yaml_values(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"chunking": {"chunk_size": 10, "overlap": 20}}))
        with pytest.raises(PydanticValidationError):
            load_settings(path)
