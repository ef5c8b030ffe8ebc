"""
Configuration management and loading.

Reads pricing overrides from YAML and layers them over the built-in table.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Optional

import yaml

from usage_pricing.core.pricing import PRICING_TABLE, ModelPricing, PricingTable

logger = logging.getLogger(__name__)

# YAML rate key -> ModelPricing field
RATE_FIELDS = {
    "input": "input_per_1m",
    "output": "output_per_1m",
    "cache_write": "cache_write_per_1m",
    "cache_read": "cache_read_per_1m",
}


@dataclass(frozen=True)
class PricingOverrides:
    """Validated pricing overrides from a config file."""
    prices: Dict[str, ModelPricing] = field(default_factory=dict)
    default: Optional[ModelPricing] = None

    def apply(self, table: PricingTable = PRICING_TABLE) -> PricingTable:
        """Return a new table with these overrides layered on top."""
        return table.with_overrides(self.prices, self.default)


def load_pricing_overrides(path: str) -> PricingOverrides:
    """Load and validate pricing overrides from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated PricingOverrides

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Pricing config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'pricing', 'default'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    pricing_data = raw_config.get('pricing', {})
    if not isinstance(pricing_data, dict):
        raise ValueError("'pricing' must be a dictionary")

    prices = {}
    for model, rates in pricing_data.items():
        prices[str(model)] = _parse_pricing(rates, f"pricing.{model}")

    default = None
    if 'default' in raw_config:
        default = _parse_pricing(raw_config['default'], "default")

    logger.info("Loaded %d pricing override(s) from %s", len(prices), path)
    return PricingOverrides(prices=prices, default=default)


def load_pricing_table(path: Optional[str] = None) -> PricingTable:
    """Get the pricing table, with overrides from `path` if given."""
    if path is None:
        return PRICING_TABLE
    return load_pricing_overrides(path).apply(PRICING_TABLE)


def _parse_pricing(data, path: str) -> ModelPricing:
    """Parse and validate a single pricing record.

    Args:
        data: Rate mapping with input, output, cache_write, cache_read
        path: Path for error messages

    Returns:
        Validated ModelPricing

    Raises:
        ValueError: If the record is invalid
    """
    if not isinstance(data, dict):
        raise ValueError(f"'{path}' must be a dictionary")

    unknown_keys = set(data.keys()) - set(RATE_FIELDS)
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

    rates = {}
    for key, field_name in RATE_FIELDS.items():
        if key not in data:
            raise ValueError(f"Missing required '{key}' in {path}")
        value = data[key]
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"'{key}' in {path} must be a number")
        try:
            rate = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"'{key}' in {path} must be a number")
        if not rate.is_finite() or rate < 0:
            raise ValueError(f"'{key}' in {path} must be >= 0")
        rates[field_name] = rate

    return ModelPricing(**rates)
