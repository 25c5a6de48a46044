"""LLM providers — Ollama, Anthropic, OpenAI."""

from minirag.llm.base import LLMProvider, LLMResponse
from minirag.llm.factory import available_providers, get_llm_provider

__all__ = ["LLMProvider", "LLMResponse", "available_providers", "get_llm_provider"]
