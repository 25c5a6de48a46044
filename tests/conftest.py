"""Shared fixtures for tests — deterministic mock providers, no network calls."""

from __future__ import annotations

import hashlib
import textwrap

import numpy as np
import pytest

from minirag.embeddings.base import EmbeddingProvider
from minirag.embeddings.embedder import Embedder
from minirag.llm.base import LLMProvider, LLMResponse
from minirag.reranking.base import RerankProvider

DIM = 64  # Small dimension for fast tests


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


class MockEmbeddingProvider(EmbeddingProvider):
    """Deterministic hash-based embeddings; records every batch it sees."""

    def __init__(self, dim: int = DIM, batch_size: int = 64):
        self._dim = dim
        self._batch_size = batch_size
        self.calls: list[list[str]] = []

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._hash_embed(t) for t in texts]

    @property
    def dimension(self) -> int:
        return self._dim

    @property
    def max_batch_size(self) -> int:
        return self._batch_size

    def _hash_embed(self, text: str) -> list[float]:
        h = hashlib.sha256(text.encode()).digest()
        vec = np.array([h[i % len(h)] / 255.0 for i in range(self._dim)], dtype=np.float32)
        vec /= np.linalg.norm(vec)
        return vec.tolist()


class MockRerankProvider(RerankProvider):
    """Scores a passage by the fraction of query words it contains."""

    def __init__(self):
        self.calls = 0

    def score(self, query: str, passages: list[str]) -> list[float]:
        self.calls += 1
        words = {w.strip("?.,!").lower() for w in query.split()}
        words.discard("")
        scores = []
        for passage in passages:
            text = passage.lower()
            hits = sum(1 for w in words if w in text)
            scores.append(hits / len(words) if words else 0.0)
        return scores


class MockLLM(LLMProvider):
    """Returns a fixed cited answer and records the last prompt."""

    def __init__(
        self,
        text: str = "The sky is blue [1].",
        prompt_tokens: int | None = 120,
        completion_tokens: int | None = 8,
    ):
        self.model = "mock-llm"
        self.text = text
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.calls = 0
        self.last_prompt = ""
        self.last_system: str | None = None

    def generate(self, prompt: str, system: str | None = None) -> LLMResponse:
        self.calls += 1
        self.last_prompt = prompt
        self.last_system = system
        return LLMResponse(
            text=self.text,
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
            model=self.model,
        )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def embedding_provider() -> MockEmbeddingProvider:
    return MockEmbeddingProvider()


@pytest.fixture
def embedder(embedding_provider: MockEmbeddingProvider) -> Embedder:
    return Embedder(embedding_provider)


@pytest.fixture
def rerank_provider() -> MockRerankProvider:
    return MockRerankProvider()


@pytest.fixture
def mock_llm() -> MockLLM:
    return MockLLM()


@pytest.fixture
def sample_text() -> str:
    return textwrap.dedent("""\
        Solar panels convert sunlight into electricity using photovoltaic cells.
        Most residential systems produce between 5 and 10 kilowatts at peak.

        Batteries store surplus energy for use at night. Lithium iron phosphate
        chemistry is common because it tolerates many charge cycles.

        Inverters turn the direct current from panels and batteries into the
        alternating current used by household appliances.
    """)
