"""
usage-pricing: cost accounting for Claude API usage.

Resolves model identifiers to per-million-token pricing and turns reported
token usage into a USD cost breakdown.
"""

from .core.audit import ConventionViolation, audit_pricing_conventions
from .core.cost import CostBreakdown, calculate_cost
from .core.pricing import DEFAULT_PRICING, MODEL_PRICING, PRICING_TABLE, ModelPricing, PricingTable
from .core.resolver import MatchKind, PricingResolution, get_model_pricing, resolve_model_pricing
from .core.token_counter import UsageTokens

__all__ = [
    "ConventionViolation",
    "CostBreakdown",
    "DEFAULT_PRICING",
    "MODEL_PRICING",
    "MatchKind",
    "ModelPricing",
    "PRICING_TABLE",
    "PricingResolution",
    "PricingTable",
    "UsageTokens",
    "audit_pricing_conventions",
    "calculate_cost",
    "get_model_pricing",
    "resolve_model_pricing",
]
