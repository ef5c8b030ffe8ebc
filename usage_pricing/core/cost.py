"""
Cost calculation from token usage.

Each of the four token categories is priced independently and the total is
the sum of those components, so `total` always equals the breakdown exactly.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Dict, Mapping, Optional, Union

from .pricing import PRICING_TABLE, TOKENS_PER_UNIT, PricingTable
from .resolver import get_model_pricing
from .token_counter import UsageTokens


@dataclass(frozen=True)
class CostBreakdown:
    """Cost of a single call in USD, split by token category."""
    total: Decimal
    input: Decimal
    output: Decimal
    cache_write: Decimal
    cache_read: Decimal

    def to_dict(self) -> Dict[str, float]:
        """Serialize using the consumer-facing field names."""
        return {
            "total": float(self.total),
            "input": float(self.input),
            "output": float(self.output),
            "cacheWrite": float(self.cache_write),
            "cacheRead": float(self.cache_read),
        }


def _component(tokens: int, rate_per_1m: Decimal) -> Decimal:
    return (Decimal(tokens) / TOKENS_PER_UNIT) * rate_per_1m


def calculate_cost(
    usage: Union[UsageTokens, Mapping[str, int]],
    model: Optional[str] = None,
    table: PricingTable = PRICING_TABLE,
) -> CostBreakdown:
    """Calculate cost for token usage.

    Token counts are not validated; negative counts yield negative costs and
    non-finite counts yield non-finite costs.

    Args:
        usage: Token usage, or an API usage payload
        model: Model identifier (optional, default pricing if not provided)
        table: Pricing table to resolve the model against

    Returns:
        Cost breakdown in USD
    """
    if not isinstance(usage, UsageTokens):
        usage = UsageTokens.from_dict(usage)

    pricing = get_model_pricing(model, table)

    # Non-finite usage yields NaN components instead of raising
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        input_cost = _component(usage.input_tokens, pricing.input_per_1m)
        output_cost = _component(usage.output_tokens, pricing.output_per_1m)
        cache_write_cost = _component(usage.cache_creation_input_tokens, pricing.cache_write_per_1m)
        cache_read_cost = _component(usage.cache_read_input_tokens, pricing.cache_read_per_1m)
        total = input_cost + output_cost + cache_write_cost + cache_read_cost

    return CostBreakdown(
        total=total,
        input=input_cost,
        output=output_cost,
        cache_write=cache_write_cost,
        cache_read=cache_read_cost,
    )
