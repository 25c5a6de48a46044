"""Embedding providers — Ollama, OpenAI, HuggingFace — and the batching embedder."""

from minirag.embeddings.base import EmbeddingProvider
from minirag.embeddings.embedder import Embedder
from minirag.embeddings.factory import available_providers, get_embedding_provider

__all__ = [
    "Embedder",
    "EmbeddingProvider",
    "available_providers",
    "get_embedding_provider",
]
