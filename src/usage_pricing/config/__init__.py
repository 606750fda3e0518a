"""Configuration models — plans, tier schedule, currencies."""

from usage_pricing.config.plans import LaunchConfig, ScaleConfig
from usage_pricing.config.schedule import (
    DEFAULT_TIER_RULES,
    MAX_TIER_COUNT,
    TierRule,
    TierScheduleConfig,
)
from usage_pricing.config.currency import (
    DEFAULT_CURRENCY,
    DEFAULT_CURRENCY_REGISTRY,
    CurrencyConfig,
    CurrencyRegistry,
)
from usage_pricing.config.pricing import PricingConfig

__all__ = [
    "LaunchConfig",
    "ScaleConfig",
    "TierRule",
    "TierScheduleConfig",
    "DEFAULT_TIER_RULES",
    "MAX_TIER_COUNT",
    "CurrencyConfig",
    "CurrencyRegistry",
    "DEFAULT_CURRENCY",
    "DEFAULT_CURRENCY_REGISTRY",
    "PricingConfig",
]
