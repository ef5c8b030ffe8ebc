"""Configuration loading for pricing overrides."""
