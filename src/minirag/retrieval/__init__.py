"""Retrieval — similarity search + reranking."""

from minirag.retrieval.reranker import Reranker
from minirag.retrieval.retriever import Retriever
from minirag.retrieval.schemas import RerankedResult, RerankOutcome

__all__ = ["RerankOutcome", "RerankedResult", "Reranker", "Retriever"]
