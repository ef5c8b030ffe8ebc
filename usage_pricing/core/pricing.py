"""
Pricing records and the built-in Claude price list.

Rates are USD per 1 million tokens. Cache writes conventionally cost 25% more
than base input and cache reads 90% less; each entry spells out all four
rates rather than deriving them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

# Rates are per million tokens
TOKENS_PER_UNIT = Decimal("1000000")


@dataclass(frozen=True)
class ModelPricing:
    """Per-million-token pricing for a specific model."""
    input_per_1m: Decimal
    output_per_1m: Decimal
    cache_write_per_1m: Decimal  # Conventionally input * 1.25
    cache_read_per_1m: Decimal  # Conventionally input * 0.10

    def __post_init__(self):
        """Validate rates are non-negative."""
        for name in ("input_per_1m", "output_per_1m", "cache_write_per_1m", "cache_read_per_1m"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")


def _rates(input_rate: str, output_rate: str, cache_write: str, cache_read: str) -> ModelPricing:
    return ModelPricing(
        input_per_1m=Decimal(input_rate),
        output_per_1m=Decimal(output_rate),
        cache_write_per_1m=Decimal(cache_write),
        cache_read_per_1m=Decimal(cache_read),
    )


# Sonnet-class pricing, used when a model cannot be identified
DEFAULT_PRICING = _rates("3", "15", "3.75", "0.30")


@dataclass(frozen=True)
class PricingTable:
    """Read-only mapping of exact model identifiers to pricing."""
    prices: Mapping[str, ModelPricing]
    default: ModelPricing = field(default=DEFAULT_PRICING)

    def __post_init__(self):
        object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.prices.items())), self.default))

    def __contains__(self, model: object) -> bool:
        return model in self.prices

    def __iter__(self) -> Iterator[str]:
        return iter(self.prices)

    def __len__(self) -> int:
        return len(self.prices)

    def get_exact(self, model: str) -> Optional[ModelPricing]:
        """Get pricing for an exact (case-sensitive) model identifier, or None."""
        return self.prices.get(model)

    def with_overrides(
        self,
        prices: Optional[Mapping[str, ModelPricing]] = None,
        default: Optional[ModelPricing] = None,
    ) -> "PricingTable":
        """Return a new table with entries added or replaced.

        The current table is left unchanged.

        Args:
            prices: Entries to add or replace, keyed by model identifier
            default: Replacement fallback record

        Returns:
            New PricingTable
        """
        merged: Dict[str, ModelPricing] = dict(self.prices)
        merged.update(prices or {})
        return PricingTable(merged, default if default is not None else self.default)


# Fixed pricing table - no dynamic fetching
MODEL_PRICING: Mapping[str, ModelPricing] = MappingProxyType({
    # Claude 4 (Opus 4.5)
    "claude-opus-4-5-20250514": _rates("15", "75", "18.75", "1.5"),

    # Claude 4 Sonnet
    "claude-sonnet-4-20250514": _rates("3", "15", "3.75", "0.30"),

    # Claude 3.5 Sonnet, latest and previous versions
    "claude-3-5-sonnet-20241022": _rates("3", "15", "3.75", "0.30"),
    "claude-3-5-sonnet-latest": _rates("3", "15", "3.75", "0.30"),
    "claude-3-5-sonnet-20240620": _rates("3", "15", "3.75", "0.30"),

    # Claude 3.5 Haiku
    "claude-3-5-haiku-20241022": _rates("0.80", "4", "1.00", "0.08"),
    "claude-3-5-haiku-latest": _rates("0.80", "4", "1.00", "0.08"),

    # Claude 3 Opus
    "claude-3-opus-20240229": _rates("15", "75", "18.75", "1.5"),
    "claude-3-opus-latest": _rates("15", "75", "18.75", "1.5"),

    # Claude 3 Sonnet
    "claude-3-sonnet-20240229": _rates("3", "15", "3.75", "0.30"),

    # Claude 3 Haiku
    "claude-3-haiku-20240307": _rates("0.25", "1.25", "0.3125", "0.025"),
})

PRICING_TABLE = PricingTable(MODEL_PRICING)
