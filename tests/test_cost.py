"""
Unit tests for cost calculations.

Tests per-component accuracy, the total invariant, and usage handling.
"""

import math
from decimal import Decimal

import pytest

from usage_pricing.core.cost import CostBreakdown, calculate_cost
from usage_pricing.core.pricing import PRICING_TABLE, ModelPricing
from usage_pricing.core.token_counter import UsageTokens


class TestUsageTokens:
    """Test UsageTokens dataclass."""

    def test_cache_counts_default_to_zero(self):
        """Verify optional cache counts default to 0."""
        usage = UsageTokens(input_tokens=100, output_tokens=50)
        assert usage.cache_creation_input_tokens == 0
        assert usage.cache_read_input_tokens == 0

    def test_total_tokens_calculation(self):
        """Verify total_tokens sums all categories."""
        usage = UsageTokens(100, 50, 25, 10)
        assert usage.total_tokens == 185

    def test_from_dict_full_payload(self):
        """Verify an API usage payload converts field for field."""
        usage = UsageTokens.from_dict({
            "input_tokens": 10,
            "output_tokens": 20,
            "cache_creation_input_tokens": 30,
            "cache_read_input_tokens": 40,
        })
        assert usage == UsageTokens(10, 20, 30, 40)

    def test_from_dict_missing_and_null_cache_counts(self):
        """Verify absent or null cache counts become 0."""
        usage = UsageTokens.from_dict({
            "input_tokens": 10,
            "output_tokens": 20,
            "cache_read_input_tokens": None,
        })
        assert usage == UsageTokens(10, 20, 0, 0)

    def test_from_dict_requires_input_and_output(self):
        """Verify required counts must be present."""
        with pytest.raises(KeyError):
            UsageTokens.from_dict({"input_tokens": 10})


class TestCostCalculation:
    """Test cost calculation accuracy."""

    def test_opus_input_only(self):
        """Verify 1M input tokens on Claude 3 Opus costs $15."""
        cost = calculate_cost(UsageTokens(input_tokens=1_000_000, output_tokens=0), "claude-3-opus-20240229")
        assert cost == CostBreakdown(
            total=Decimal("15"),
            input=Decimal("15"),
            output=Decimal("0"),
            cache_write=Decimal("0"),
            cache_read=Decimal("0"),
        )

    def test_haiku_cache_tokens(self):
        """Verify cache write and read pricing on Claude 3 Haiku."""
        usage = UsageTokens(
            input_tokens=0,
            output_tokens=0,
            cache_creation_input_tokens=2_000_000,
            cache_read_input_tokens=500_000,
        )
        cost = calculate_cost(usage, "claude-3-haiku-20240307")
        # Cache write: 2 * $0.3125 = $0.625
        # Cache read: 0.5 * $0.025 = $0.0125
        assert cost.cache_write == Decimal("0.625")
        assert cost.cache_read == Decimal("0.0125")
        assert cost.input == 0
        assert cost.output == 0
        assert cost.total == Decimal("0.6375")

    def test_accepts_usage_mapping(self):
        """Verify raw API usage dicts are accepted."""
        cost = calculate_cost({"input_tokens": 1_000_000, "output_tokens": 0}, "claude-3-opus-20240229")
        assert cost.input == Decimal("15")
        assert cost.total == Decimal("15")

    def test_all_components(self):
        """Verify each component uses its own rate."""
        usage = UsageTokens(1000, 2000, 3000, 4000)
        cost = calculate_cost(usage, "claude-sonnet-4-20250514")
        # Input: 1000/1M * $3 = $0.003
        # Output: 2000/1M * $15 = $0.03
        # Cache write: 3000/1M * $3.75 = $0.01125
        # Cache read: 4000/1M * $0.30 = $0.0012
        assert cost.input == Decimal("0.003")
        assert cost.output == Decimal("0.03")
        assert cost.cache_write == Decimal("0.01125")
        assert cost.cache_read == Decimal("0.0012")
        assert cost.total == Decimal("0.04545")

    def test_no_model_uses_default_pricing(self):
        """Verify missing model prices at the default rates."""
        cost = calculate_cost(UsageTokens(1_000_000, 1_000_000))
        assert cost.input == Decimal("3")
        assert cost.output == Decimal("15")
        assert cost.total == Decimal("18")

    def test_family_matched_model(self):
        """Verify unlisted ids are priced via their family."""
        cost = calculate_cost(UsageTokens(0, 1_000_000), "claude-3-5-haiku-20991231")
        assert cost.output == Decimal("4")

    def test_zero_usage(self):
        """Verify zero usage costs nothing."""
        cost = calculate_cost(UsageTokens(0, 0), "claude-opus-4-5-20250514")
        assert cost.total == 0
        assert cost.total == cost.input + cost.output + cost.cache_write + cost.cache_read

    def test_single_token(self):
        """Verify small counts are not rounded away."""
        cost = calculate_cost(UsageTokens(1, 0), "claude-3-haiku-20240307")
        assert cost.input == Decimal("0.00000025")

    def test_negative_tokens_not_validated(self):
        """Verify negative counts produce negative costs."""
        cost = calculate_cost(UsageTokens(-1_000_000, 0), "claude-3-opus-20240229")
        assert cost.input == Decimal("-15")
        assert cost.total == Decimal("-15")

    def test_infinite_tokens_at_zero_rate(self):
        """Verify infinite usage on free pricing gives NaN, not an error."""
        free = ModelPricing(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))
        table = PRICING_TABLE.with_overrides({"free": free})
        cost = calculate_cost(UsageTokens(float("inf"), 0), "free", table)
        assert cost.input.is_nan()
        assert cost.total.is_nan()
        assert math.isnan(cost.to_dict()["total"])

    def test_opposite_infinities(self):
        """Verify infinite usage flows through to a non-finite breakdown."""
        cost = calculate_cost(
            {"input_tokens": float("inf"), "output_tokens": float("-inf")},
            "claude-3-opus-20240229",
        )
        assert cost.input == Decimal("Infinity")
        assert cost.output == Decimal("-Infinity")
        assert cost.cache_write == 0
        assert cost.total.is_nan()

    def test_custom_table(self):
        """Verify a supplied table is used for pricing."""
        free = ModelPricing(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))
        table = PRICING_TABLE.with_overrides({"local-model": free})
        cost = calculate_cost(UsageTokens(5_000_000, 5_000_000), "local-model", table)
        assert cost.total == 0


class TestTotalInvariant:
    """Test total always equals the sum of components."""

    @pytest.mark.parametrize("usage", [
        UsageTokens(0, 0),
        UsageTokens(1, 1, 1, 1),
        UsageTokens(333, 667, 12_345, 98_765),
        UsageTokens(123_456_789, 987_654, 3, 7),
    ])
    def test_total_equals_sum(self, usage):
        """Verify the invariant for every model in the table."""
        for model in list(PRICING_TABLE) + [None, "unknown-model"]:
            cost = calculate_cost(usage, model)
            assert cost.total == cost.input + cost.output + cost.cache_write + cost.cache_read

    def test_repeated_calls_identical(self):
        """Verify identical inputs give identical results."""
        usage = UsageTokens(333, 667, 12_345, 98_765)
        assert calculate_cost(usage, "claude-3-opus-20240229") == calculate_cost(usage, "claude-3-opus-20240229")


class TestCostBreakdown:
    """Test CostBreakdown serialization."""

    def test_to_dict_uses_consumer_field_names(self):
        """Verify the serialized schema keys and values."""
        usage = UsageTokens(0, 0, 2_000_000, 500_000)
        data = calculate_cost(usage, "claude-3-haiku-20240307").to_dict()
        assert data == {
            "total": 0.6375,
            "input": 0.0,
            "output": 0.0,
            "cacheWrite": 0.625,
            "cacheRead": 0.0125,
        }
