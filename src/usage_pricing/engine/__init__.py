"""Engine — pure pricing functions: tiers, take rates, plans, currencies."""

from usage_pricing.engine.tiers import generate_scale_tiers
from usage_pricing.engine.take_rate import launch_fee, resolve_take_rate, scale_fee
from usage_pricing.engine.calculator import (
    calculate_launch_pricing,
    calculate_scale_pricing,
    compare_pricing,
)
from usage_pricing.engine.conversion import convert_from_base, convert_to_base
from usage_pricing.engine.formatting import (
    format_compact_currency,
    format_currency,
    format_percentage,
    format_revenue,
)

__all__ = [
    "generate_scale_tiers",
    "resolve_take_rate",
    "launch_fee",
    "scale_fee",
    "convert_from_base",
    "convert_to_base",
    "format_currency",
    "format_compact_currency",
    "format_percentage",
    # Plan calculators
    "calculate_launch_pricing",
    "calculate_scale_pricing",
    "compare_pricing",
    "format_revenue",
]
