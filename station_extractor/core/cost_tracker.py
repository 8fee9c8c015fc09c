"""Token and cost tracking for model calls.

One CallUsage is recorded per source document sent to the model, so the
breakdown shows what each document cost.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# Fallback pricing per 1M tokens (USD) when the litellm lookup fails.
_FALLBACK_PRICING: dict[str, tuple[float, float]] = {
    # (input_cost_per_1M, output_cost_per_1M)
    "gemini-1.5-flash": (0.075, 0.30),
    "gemini-1.5-pro": (1.25, 5.00),
    "openai/gpt-4o-mini": (0.15, 0.60),
    "openai/gpt-4o": (2.50, 10.00),
    "gpt-4o-mini": (0.15, 0.60),
    "gpt-4o": (2.50, 10.00),
}

_warned_models: set[str] = set()


def _normalize_model_name(model: str) -> str:
    """Strip provider routing prefixes for pricing lookup.

    ``gemini/gemini-1.5-flash`` -> ``gemini-1.5-flash``,
    ``openrouter/openai/gpt-4o-mini`` -> ``openai/gpt-4o-mini``.
    """
    for prefix in ("openrouter/", "gemini/", "azure/"):
        if model.startswith(prefix):
            return model[len(prefix):]
    return model


@dataclass
class CallUsage:
    """Usage for a single model call."""

    model: str
    prompt_tokens: int
    completion_tokens: int
    source: str = ""  # Source document the call was made for

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    @property
    def cost(self) -> float:
        """Cost in USD from litellm's pricing database, else the fallback table."""
        normalized = _normalize_model_name(self.model)
        try:
            from litellm import completion_cost
            return completion_cost(
                model=normalized,
                prompt_tokens=self.prompt_tokens,
                completion_tokens=self.completion_tokens,
            )
        except Exception:
            if normalized in _FALLBACK_PRICING:
                input_rate, output_rate = _FALLBACK_PRICING[normalized]
                return (self.prompt_tokens * input_rate + self.completion_tokens * output_rate) / 1_000_000
            if self.model not in _warned_models:
                _warned_models.add(self.model)
                logger.warning(f"No pricing available for model '{self.model}', cost will show as $0")
            return 0.0


@dataclass
class CostTracker:
    """Accumulates token usage and costs across a run."""

    calls: list[CallUsage] = field(default_factory=list)

    def record(self, model: str, usage: Any, source: str = "") -> CallUsage:
        """Record usage from a LiteLLM response.

        Args:
            model: Model identifier (e.g., "gemini/gemini-1.5-flash")
            usage: The usage object from response.usage (may be None)
            source: Source document name

        Returns:
            The recorded CallUsage
        """
        call = CallUsage(
            model=model,
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            source=source,
        )
        if usage is not None:
            self.calls.append(call)
        return call

    @property
    def total_prompt_tokens(self) -> int:
        return sum(c.prompt_tokens for c in self.calls)

    @property
    def total_completion_tokens(self) -> int:
        return sum(c.completion_tokens for c in self.calls)

    @property
    def total_tokens(self) -> int:
        return self.total_prompt_tokens + self.total_completion_tokens

    @property
    def total_cost(self) -> float:
        return sum(c.cost for c in self.calls)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def by_source(self) -> dict[str, dict[str, Any]]:
        """Breakdown of calls, tokens and cost per source document."""
        breakdown: dict[str, dict[str, Any]] = {}
        for call in self.calls:
            entry = breakdown.setdefault(
                call.source or "unknown",
                {"calls": 0, "tokens": 0, "cost": 0.0},
            )
            entry["calls"] += 1
            entry["tokens"] += call.total_tokens
            entry["cost"] += call.cost
        return breakdown

    def summary(self) -> str:
        """Formatted usage and cost summary."""
        lines = [
            "=" * 50,
            "COST SUMMARY",
            "=" * 50,
            f"Model calls: {self.call_count}",
            f"Total tokens: {self.total_tokens:,} "
            f"(prompt {self.total_prompt_tokens:,}, completion {self.total_completion_tokens:,})",
            f"Total cost: ${self.total_cost:.4f}",
            "",
            "By source:",
        ]
        for source, stats in self.by_source().items():
            lines.append(f"  {source}: {stats['tokens']:,} tokens, ${stats['cost']:.4f}")
        lines.append("=" * 50)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Export as dict for JSON serialization."""
        return {
            "total_calls": self.call_count,
            "total_tokens": self.total_tokens,
            "total_cost_usd": round(self.total_cost, 6),
            "by_source": self.by_source(),
        }
