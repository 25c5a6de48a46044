"""Answer synthesis — ranked chunks → grounded prompt → LLM → cited answer."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from minirag.errors import SynthesisFailure, ValidationError
from minirag.llm.base import LLMProvider
from minirag.pipeline.citations import build_citations, referenced_indices
from minirag.pipeline.prompts import (
    NO_RELEVANT_INFO_ANSWER,
    RAG_SYSTEM_PROMPT,
    build_rag_prompt,
)
from minirag.pipeline.schemas import SynthesisResult
from minirag.retrieval.schemas import RerankedResult
from minirag.usage import UsageAccountant

logger = logging.getLogger(__name__)


class AnswerSynthesizer:
    """Build one grounded prompt from the top chunks and call the LLM once."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        accountant: UsageAccountant | None = None,
        system_prompt: str = RAG_SYSTEM_PROMPT,
    ):
        self.llm_provider = llm_provider
        self.accountant = accountant or UsageAccountant()
        self.system_prompt = system_prompt

    def synthesize(
        self,
        query: str,
        ranked: Sequence[RerankedResult],
        citation_limit: int = 5,
    ) -> SynthesisResult:
        """Answer ``query`` from the first ``citation_limit`` ranked chunks.

        With no ranked chunks the answer says so explicitly and the LLM is
        not called.

        Raises:
            ValidationError: ``citation_limit`` is below 1.
            SynthesisFailure: The LLM call failed or returned no text.
        """
        if citation_limit < 1:
            raise ValidationError(f"citation_limit must be >= 1, got {citation_limit}")

        if not ranked:
            return SynthesisResult(answer=NO_RELEVANT_INFO_ANSWER)

        context = list(ranked[:citation_limit])
        citations = build_citations(context)
        prompt = build_rag_prompt(
            question=query,
            context_texts=[c.content for c in context],
            labels=[c.metadata.title or c.metadata.source for c in context],
        )

        try:
            response = self.llm_provider.generate(prompt, system=self.system_prompt)
        except Exception as exc:
            raise SynthesisFailure(str(exc) or exc.__class__.__name__) from exc

        answer = response.text.strip()
        if not answer:
            raise SynthesisFailure("language model returned an empty answer")

        prompt_tokens = response.prompt_tokens
        if prompt_tokens is None:
            prompt_tokens = self.accountant.estimate_tokens(self.system_prompt + prompt)
        completion_tokens = response.completion_tokens
        if completion_tokens is None:
            completion_tokens = self.accountant.estimate_tokens(answer)
        usage = self.accountant.completion_usage(prompt_tokens, completion_tokens)

        logger.info(
            "Synthesized answer from %d chunks (%d referenced, %d tokens)",
            len(citations),
            len(referenced_indices(answer, limit=len(citations))),
            usage.total_tokens,
        )

        return SynthesisResult(
            answer=answer,
            citations=citations,
            usage=usage,
            model=response.model or getattr(self.llm_provider, "model", ""),
        )
