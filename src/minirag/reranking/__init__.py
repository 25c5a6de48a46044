"""Rerank providers — local cross-encoder and Cohere."""

from minirag.reranking.base import RerankProvider
from minirag.reranking.factory import available_providers, get_rerank_provider

__all__ = ["RerankProvider", "available_providers", "get_rerank_provider"]
