"""Application settings loaded from YAML.

``MINIRAG_PROFILE`` selects a ``settings-<profile>.yaml`` variant.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, model_validator

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class EmbeddingSettings(BaseModel):
    provider: str = "ollama"
    model: str = "nomic-embed-text"
    dimension: int = 768
    batch_size: int = 64
    max_concurrency: int = 1
    timeout: float = 60.0


class VectorStoreSettings(BaseModel):
    backend: str = "faiss"
    path: str = "local_data/vectorstore"
    collection: str = "documents"
    url: str | None = None


class LLMSettings(BaseModel):
    provider: str = "ollama"
    model: str = "llama3.1:8b"
    temperature: float = 0.2
    max_tokens: int = 1024
    timeout: float = 120.0


class RerankerSettings(BaseModel):
    provider: str = "cross-encoder"
    model: str = "cross-encoder/ms-marco-MiniLM-L-6-v2"
    threshold: float | None = None
    timeout: float = 30.0


class ChunkingSettings(BaseModel):
    chunk_size: int = Field(default=1000, gt=0)
    overlap: int = Field(default=200, ge=0)

    @model_validator(mode="after")
    def _overlap_below_size(self) -> ChunkingSettings:
        if self.overlap >= self.chunk_size:
            raise ValueError(
                f"chunking.overlap ({self.overlap}) must be smaller than "
                f"chunking.chunk_size ({self.chunk_size})"
            )
        return self


class RetrievalSettings(BaseModel):
    top_k: int = Field(default=10, gt=0)
    citation_limit: int = Field(default=5, gt=0)


class PricingSettings(BaseModel):
    """Provider prices in USD per million tokens."""

    chars_per_token: int = Field(default=4, gt=0)
    embedding_per_million: float = Field(default=0.02, ge=0)
    prompt_per_million: float = Field(default=0.15, ge=0)
    completion_per_million: float = Field(default=0.60, ge=0)


class IngestionSettings(BaseModel):
    reingest_policy: Literal["append", "replace"] = "append"
    max_text_chars: int = 10 * 1024 * 1024


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    vectorstore: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    reranker: RerankerSettings = Field(default_factory=RerankerSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


def _find_settings_file() -> Path | None:
    """Walk up from cwd looking for settings.yaml."""
    profile = os.getenv("MINIRAG_PROFILE", "")
    names = [f"settings-{profile}.yaml", "settings.yaml"] if profile else ["settings.yaml"]

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        for name in names:
            candidate = parent / name
            if candidate.exists():
                return candidate
    return None


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML file, falling back to defaults."""
    path = Path(path) if path else _find_settings_file()
    if path is None:
        return Settings()

    with open(path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    return Settings(**raw)
