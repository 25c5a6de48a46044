"""Vector store backends — FAISS (local) and Qdrant (server or embedded)."""

from minirag.vectorstore.base import VectorStore
from minirag.vectorstore.factory import available_stores, get_vector_store
from minirag.vectorstore.schemas import SearchResult, SourceSummary, VectorRecord

__all__ = [
    "SearchResult",
    "SourceSummary",
    "VectorRecord",
    "VectorStore",
    "available_stores",
    "get_vector_store",
]
