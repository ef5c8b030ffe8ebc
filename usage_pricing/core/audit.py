"""
Pricing table convention checks.

Cache write rates are expected at 1.25x input and cache read rates at 0.10x
input. Deviations are reported, never corrected.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from .pricing import PRICING_TABLE, ModelPricing, PricingTable

CACHE_WRITE_MULTIPLIER = Decimal("1.25")
CACHE_READ_MULTIPLIER = Decimal("0.10")
DEFAULT_TOLERANCE = Decimal("0.000001")

DEFAULT_ENTRY_NAME = "<default>"


@dataclass(frozen=True)
class ConventionViolation:
    """A cache rate that does not follow the input-rate convention."""
    model: str
    field: str
    expected: Decimal
    actual: Decimal


def _check(model: str, pricing: ModelPricing, tolerance: Decimal) -> List[ConventionViolation]:
    expectations = (
        ("cache_write_per_1m", pricing.input_per_1m * CACHE_WRITE_MULTIPLIER),
        ("cache_read_per_1m", pricing.input_per_1m * CACHE_READ_MULTIPLIER),
    )
    violations = []
    for field_name, expected in expectations:
        actual = getattr(pricing, field_name)
        if abs(actual - expected) > tolerance:
            violations.append(ConventionViolation(model, field_name, expected, actual))
    return violations


def audit_pricing_conventions(
    table: PricingTable = PRICING_TABLE,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> List[ConventionViolation]:
    """Check every table entry and the default against the cache conventions.

    Args:
        table: Pricing table to audit
        tolerance: Allowed absolute difference per rate

    Returns:
        Violations in table order, default record last; empty if consistent
    """
    violations: List[ConventionViolation] = []
    for model in table:
        violations.extend(_check(model, table.prices[model], tolerance))
    violations.extend(_check(DEFAULT_ENTRY_NAME, table.default, tolerance))
    return violations
