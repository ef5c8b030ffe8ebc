"""
Core modules for usage-pricing.

This package contains the pricing table, model resolution, cost
calculation, and table convention checks.
"""
