"""End-to-end RAG pipeline — ingest, query, prompts, citations."""

from minirag.pipeline.ingest import IngestPipeline
from minirag.pipeline.query import QueryPipeline
from minirag.pipeline.schemas import (
    Citation,
    IngestResult,
    PipelineTiming,
    QueryResponse,
    SynthesisResult,
)
from minirag.pipeline.synthesizer import AnswerSynthesizer

__all__ = [
    "AnswerSynthesizer",
    "Citation",
    "IngestPipeline",
    "IngestResult",
    "PipelineTiming",
    "QueryPipeline",
    "QueryResponse",
    "SynthesisResult",
]
