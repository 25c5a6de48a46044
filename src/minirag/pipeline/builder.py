"""Build pipelines from ``Settings``.

The single place where concrete providers and stores are wired together.
Callers build once at startup and reuse the pipelines; nothing here runs at
import time.
"""

from __future__ import annotations

from minirag.chunking.window_chunker import WindowChunker
from minirag.config import Settings
from minirag.embeddings.embedder import Embedder
from minirag.embeddings.factory import get_embedding_provider
from minirag.llm.factory import get_llm_provider
from minirag.pipeline.ingest import IngestPipeline
from minirag.pipeline.query import QueryPipeline
from minirag.pipeline.synthesizer import AnswerSynthesizer
from minirag.reranking.factory import get_rerank_provider
from minirag.retrieval.reranker import Reranker
from minirag.retrieval.retriever import Retriever
from minirag.usage import UsageAccountant
from minirag.vectorstore.base import VectorStore
from minirag.vectorstore.factory import get_vector_store


def build_embedder(settings: Settings) -> Embedder:
    cfg = settings.embedding
    provider = get_embedding_provider(
        cfg.provider,
        model=cfg.model,
        dimension=cfg.dimension,
        batch_size=cfg.batch_size,
        timeout=cfg.timeout,
    )
    return Embedder(provider, batch_size=cfg.batch_size, max_concurrency=cfg.max_concurrency)


def build_vector_store(settings: Settings, dimension: int) -> VectorStore:
    cfg = settings.vectorstore
    if cfg.backend == "qdrant":
        return get_vector_store(
            "qdrant",
            collection_name=cfg.collection,
            dimension=dimension,
            url=cfg.url,
            path=None if cfg.url else cfg.path,
        )
    return get_vector_store(cfg.backend, dimension=dimension, path=cfg.path)


def build_ingest_pipeline(
    settings: Settings,
    embedder: Embedder | None = None,
    vector_store: VectorStore | None = None,
) -> IngestPipeline:
    embedder = embedder or build_embedder(settings)
    store = vector_store or build_vector_store(settings, embedder.dimension)
    return IngestPipeline(
        embedder=embedder,
        vector_store=store,
        chunker=WindowChunker(
            chunk_size=settings.chunking.chunk_size,
            overlap=settings.chunking.overlap,
        ),
        accountant=UsageAccountant(settings.pricing),
        reingest_policy=settings.ingestion.reingest_policy,
        max_text_chars=settings.ingestion.max_text_chars,
    )


def build_query_pipeline(
    settings: Settings,
    embedder: Embedder | None = None,
    vector_store: VectorStore | None = None,
) -> QueryPipeline:
    embedder = embedder or build_embedder(settings)
    store = vector_store or build_vector_store(settings, embedder.dimension)

    rerank_cfg = settings.reranker
    reranker = Reranker(
        get_rerank_provider(
            rerank_cfg.provider, model=rerank_cfg.model, timeout=rerank_cfg.timeout,
        ),
        threshold=rerank_cfg.threshold,
    )

    llm_cfg = settings.llm
    llm = get_llm_provider(
        llm_cfg.provider,
        model=llm_cfg.model,
        temperature=llm_cfg.temperature,
        max_tokens=llm_cfg.max_tokens,
        timeout=llm_cfg.timeout,
    )

    return QueryPipeline(
        retriever=Retriever(embedder, store),
        reranker=reranker,
        synthesizer=AnswerSynthesizer(llm, accountant=UsageAccountant(settings.pricing)),
        top_k=settings.retrieval.top_k,
        citation_limit=settings.retrieval.citation_limit,
    )
