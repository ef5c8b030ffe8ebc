"""
Token counting and usage tracking.

Holds the usage counts reported by the Messages API for a single call.
"""

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class UsageTokens:
    """Token usage data for cost calculation.

    Mirrors the `usage` block of an API response. Cache counts are optional
    upstream and default to zero here. Counts are taken as reported, without
    validation.
    """
    input_tokens: int
    output_tokens: int
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        """Total tokens across all four categories."""
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_creation_input_tokens
            + self.cache_read_input_tokens
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UsageTokens":
        """Build usage from an API usage payload.

        Args:
            data: Mapping with `input_tokens`, `output_tokens` and optionally
                `cache_creation_input_tokens` / `cache_read_input_tokens`

        Returns:
            UsageTokens with missing or null cache counts set to 0

        Raises:
            KeyError: If input_tokens or output_tokens is missing
        """
        return cls(
            input_tokens=data["input_tokens"],
            output_tokens=data["output_tokens"],
            cache_creation_input_tokens=data.get("cache_creation_input_tokens") or 0,
            cache_read_input_tokens=data.get("cache_read_input_tokens") or 0,
        )
