"""mini-rag — chunk, embed, retrieve, rerank and answer with citations."""

__version__ = "0.1.0"
