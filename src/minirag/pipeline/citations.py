"""Citation assembly and parsing.

Citations are numbered 1..N in the order the chunks are shown to the model.
``referenced_indices`` parses [1], [2,3], [1-3] markers back out of the answer.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from minirag.pipeline.schemas import Citation
from minirag.retrieval.schemas import RerankedResult

# Matches [1], [2], [3,4], [1-3], etc.
_CITATION_RE = re.compile(r"\[(\d+(?:\s*[,\-]\s*\d+)*)\]")


def build_citations(ranked: Sequence[RerankedResult]) -> list[Citation]:
    """One citation per chunk, indexed by its 1-based position in ``ranked``."""
    return [
        Citation(
            index=i,
            content=result.content,
            source=result.metadata.source,
            title=result.metadata.title,
            position=result.metadata.position,
            rerank_score=result.rerank_score,
        )
        for i, result in enumerate(ranked, 1)
    ]


def referenced_indices(answer: str, limit: int | None = None) -> list[int]:
    """Return the sorted, distinct citation numbers used in ``answer``.

    Args:
        answer: The LLM-generated answer text.
        limit: If given, numbers outside ``1..limit`` are ignored.
    """
    cited: set[int] = set()
    for match in _CITATION_RE.finditer(answer):
        # Handle ranges like [1-3] and lists like [1,2]
        for part in match.group(1).split(","):
            part = part.strip()
            if "-" in part:
                start, end = (int(p) for p in part.split("-", 1))
                cited.update(range(start, end + 1))
            else:
                cited.add(int(part))

    if limit is not None:
        cited = {i for i in cited if 1 <= i <= limit}
    return sorted(cited)


def format_citations(citations: Sequence[Citation]) -> str:
    """Format citations as a markdown sources block."""
    if not citations:
        return ""

    lines = ["\n---\n**Sources:**"]
    for c in citations:
        parts = [f"[{c.index}]", c.source]
        if c.title:
            parts.append(c.title)
        parts.append(f"chunk {c.position}")
        lines.append(f"- {' | '.join(parts)} (score {c.rerank_score:.3f})")

    return "\n".join(lines)
