"""Prompt templates for grounded, cited answers."""

from __future__ import annotations

from collections.abc import Sequence

# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

RAG_SYSTEM_PROMPT = """\
You are a careful assistant that answers questions about the user's documents. \
Answer using ONLY the numbered context passages provided. If the passages do \
not contain enough information to answer, say so explicitly.

Rules:
1. After every claim, cite the passage that supports it as [1], [2], etc., \
using the passage numbers given below.
2. Never cite a number that is not in the context.
3. Do not use outside knowledge.
4. If passages conflict, point out the conflict and cite both.
"""

RAG_QUERY_TEMPLATE = """\
Context passages:
{context}

Question: {question}

Answer the question using only the context passages above. Mark which \
passage supports each claim with its number in square brackets, e.g. [1].
"""

NO_RELEVANT_INFO_ANSWER = (
    "No relevant information was found in the uploaded documents "
    "to answer this question."
)


def format_context(texts: Sequence[str], labels: Sequence[str] | None = None) -> str:
    """Format context passages for insertion into the prompt.

    Args:
        texts: The passage texts, in citation order.
        labels: Optional source labels (filenames, titles).

    Returns:
        Formatted context string with passages numbered from 1.
    """
    parts = []
    for i, text in enumerate(texts, 1):
        label = f"[{i}]"
        if labels and i - 1 < len(labels):
            label += f" (source: {labels[i - 1]})"
        parts.append(f"{label}\n{text}")
    return "\n\n---\n\n".join(parts)


def build_rag_prompt(
    question: str,
    context_texts: Sequence[str],
    labels: Sequence[str] | None = None,
) -> str:
    """Build a complete RAG prompt with numbered context and the question."""
    context = format_context(context_texts, labels)
    return RAG_QUERY_TEMPLATE.format(context=context, question=question)
