"""
Model resolution.

Maps an arbitrary model string to a pricing record. Resolution order:
1. No model - default pricing
2. Exact (case-sensitive) table key
3. Family rules, checked top to bottom against the lower-cased id
4. Default pricing

Resolution never fails; unknown ids get the default record.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .pricing import PRICING_TABLE, ModelPricing, PricingTable

logger = logging.getLogger(__name__)


class MatchKind(Enum):
    """How a model id was resolved to pricing."""
    EXACT = "exact"
    FAMILY = "family"
    DEFAULT = "default"


@dataclass(frozen=True)
class FamilyRule:
    """Substring patterns that map a model family to a table key."""
    patterns: Tuple[str, ...]
    target: str

    def matches(self, model_lower: str) -> bool:
        return any(pattern in model_lower for pattern in self.patterns)


# Order matters: first match wins
FAMILY_RULES: Tuple[FamilyRule, ...] = (
    FamilyRule(("opus-4", "opus-4.5"), "claude-opus-4-5-20250514"),
    FamilyRule(("sonnet-4",), "claude-sonnet-4-20250514"),
    FamilyRule(("3-5-sonnet", "3.5-sonnet"), "claude-3-5-sonnet-20241022"),
    FamilyRule(("3-5-haiku", "3.5-haiku"), "claude-3-5-haiku-20241022"),
    FamilyRule(("opus",), "claude-3-opus-20240229"),
    FamilyRule(("haiku",), "claude-3-haiku-20240307"),
    # Generic sonnet ids price as 3.5 Sonnet, not the 3.0 entry
    FamilyRule(("sonnet",), "claude-3-5-sonnet-20241022"),
)


@dataclass(frozen=True)
class PricingResolution:
    """Resolved pricing along with how it was found."""
    pricing: ModelPricing
    matched_via: MatchKind
    matched_key: Optional[str] = None


def match_family(model: str) -> Optional[FamilyRule]:
    """Return the first family rule matching a model id, if any."""
    model_lower = model.lower()
    for rule in FAMILY_RULES:
        if rule.matches(model_lower):
            return rule
    return None


def resolve_model_pricing(
    model: Optional[str] = None,
    table: PricingTable = PRICING_TABLE,
) -> PricingResolution:
    """Resolve a model id to pricing, tagged with the match kind.

    Args:
        model: Model identifier, may be None or any string
        table: Pricing table to resolve against

    Returns:
        PricingResolution; DEFAULT when nothing matched
    """
    if not model:
        return PricingResolution(table.default, MatchKind.DEFAULT)

    exact = table.get_exact(model)
    if exact is not None:
        return PricingResolution(exact, MatchKind.EXACT, model)

    rule = match_family(model)
    if rule is not None:
        target = table.get_exact(rule.target)
        if target is not None:
            return PricingResolution(target, MatchKind.FAMILY, rule.target)
        logger.debug("Family target %s for model %r not in pricing table", rule.target, model)

    logger.debug("No pricing for model %r, using default", model)
    return PricingResolution(table.default, MatchKind.DEFAULT)


def get_model_pricing(
    model: Optional[str] = None,
    table: PricingTable = PRICING_TABLE,
) -> ModelPricing:
    """Get pricing for a model, with fallback to default."""
    return resolve_model_pricing(model, table).pricing
