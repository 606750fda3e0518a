"""Result models — pricing output contracts."""

from usage_pricing.models.results import (
    LaunchPricingResult,
    PricingComparison,
    ScalePricingResult,
    ScaleTier,
    TakeRateResolution,
)

__all__ = [
    "LaunchPricingResult",
    "PricingComparison",
    "ScalePricingResult",
    "ScaleTier",
    "TakeRateResolution",
]
