"""Token estimation and cost accounting.

Token counts are estimated from text length at a fixed characters-per-token
ratio. This is good enough for cost estimates, not for billing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from minirag.config import PricingSettings
from minirag.errors import ValidationError

_PER_MILLION = 1_000_000


@dataclass(frozen=True)
class UsageStats:
    """Token usage and estimated cost of one call."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    estimated_cost: float = 0.0

    def __add__(self, other: UsageStats) -> UsageStats:
        return UsageStats(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
            estimated_cost=self.estimated_cost + other.estimated_cost,
        )


class UsageAccountant:
    """Estimate token counts and USD cost from a fixed price table."""

    def __init__(self, pricing: PricingSettings | None = None):
        self.pricing = pricing or PricingSettings()

    def estimate_tokens(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self.pricing.chars_per_token)

    def estimate_embedding_cost(self, total_tokens: int) -> float:
        _check_count("total_tokens", total_tokens)
        return total_tokens * self.pricing.embedding_per_million / _PER_MILLION

    def estimate_completion_cost(self, prompt_tokens: int, completion_tokens: int) -> float:
        _check_count("prompt_tokens", prompt_tokens)
        _check_count("completion_tokens", completion_tokens)
        prompt_cost = prompt_tokens * self.pricing.prompt_per_million / _PER_MILLION
        completion_cost = completion_tokens * self.pricing.completion_per_million / _PER_MILLION
        return prompt_cost + completion_cost

    def completion_usage(self, prompt_tokens: int, completion_tokens: int) -> UsageStats:
        """Build ``UsageStats`` for one language-model call."""
        return UsageStats(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            estimated_cost=self.estimate_completion_cost(prompt_tokens, completion_tokens),
        )


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise ValidationError(f"{name} must be >= 0, got {value}")
