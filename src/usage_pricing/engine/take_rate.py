"""Take-rate resolution and per-plan fee formulas.

The schedule is a step function over revenue: a tier applies from its
threshold (inclusive) up to the next tier's threshold (exclusive).
Revenue below the first threshold still pays tier 1; revenue beyond the
last threshold pays the last tier.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence

from usage_pricing.config.plans import LaunchConfig, ScaleConfig
from usage_pricing.config.types import validate_count, validate_money
from usage_pricing.models.results import ScaleTier, TakeRateResolution


def resolve_take_rate(tiers: Sequence[ScaleTier], revenue: float) -> TakeRateResolution:
    """Find the tier with the greatest threshold ≤ ``revenue``.

    Raises ``ValidationError`` for negative or non-finite revenue and
    ``ValueError`` for an empty schedule.
    """
    revenue = validate_money(revenue)
    if not tiers:
        raise ValueError("cannot resolve a take rate against an empty tier schedule")

    ordered = sorted(tiers, key=lambda t: t.revenue_threshold)
    thresholds = [t.revenue_threshold for t in ordered]
    index = max(bisect_right(thresholds, revenue) - 1, 0)
    selected = ordered[index]
    return TakeRateResolution(tier=selected, effective_rate=selected.take_rate)


def launch_fee(config: LaunchConfig, revenue: float) -> float:
    """fixed_monthly + revenue_percentage × revenue."""
    revenue = validate_money(revenue)
    return config.fixed_monthly + config.revenue_percentage * revenue


def scale_fee(
    config: ScaleConfig,
    tiers: Sequence[ScaleTier],
    revenue: float,
    department_count: int = 0,
) -> float:
    """fixed_monthly + per_department × departments + effective_rate × revenue."""
    revenue = validate_money(revenue)
    department_count = validate_count(department_count)
    resolution = resolve_take_rate(tiers, revenue)
    return (
        config.fixed_monthly
        + config.per_department * department_count
        + resolution.effective_rate * revenue
    )
