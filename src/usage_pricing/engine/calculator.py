"""Annual plan calculators — Launch, Scale, and the comparison between them.

All revenue inputs are **annual revenue in the base currency**.  Fixed fees
are monthly and annualised ×12.
"""

from __future__ import annotations

from collections.abc import Sequence

from usage_pricing.config.plans import LaunchConfig, ScaleConfig
from usage_pricing.config.types import validate_count, validate_money
from usage_pricing.engine.take_rate import resolve_take_rate
from usage_pricing.engine.tiers import generate_scale_tiers
from usage_pricing.models.results import (
    LaunchPricingResult,
    PricingComparison,
    ScalePricingResult,
    ScaleTier,
)

MONTHS_PER_YEAR = 12


def calculate_launch_pricing(
    annual_revenue: float,
    config: LaunchConfig | None = None,
) -> LaunchPricingResult:
    """Launch plan: fixed monthly fee + flat revenue share."""
    annual_revenue = validate_money(annual_revenue)
    config = config or LaunchConfig()

    fixed_cost_yearly = config.fixed_monthly * MONTHS_PER_YEAR
    revenue_cost = annual_revenue * config.revenue_percentage
    total_yearly = fixed_cost_yearly + revenue_cost

    return LaunchPricingResult(
        fixed_cost_monthly=config.fixed_monthly,
        fixed_cost_yearly=fixed_cost_yearly,
        revenue_cost=revenue_cost,
        total_monthly=total_yearly / MONTHS_PER_YEAR,
        total_yearly=total_yearly,
        effective_rate=total_yearly / annual_revenue if annual_revenue > 0 else 0.0,
    )


def calculate_scale_pricing(
    annual_revenue: float,
    department_count: int,
    config: ScaleConfig | None = None,
    tiers: Sequence[ScaleTier] | None = None,
) -> ScalePricingResult:
    """Scale plan: fixed + per-department fees + the resolved tier's take rate."""
    annual_revenue = validate_money(annual_revenue)
    department_count = validate_count(department_count)
    config = config or ScaleConfig()
    if tiers is None:
        tiers = generate_scale_tiers(config)

    resolution = resolve_take_rate(tiers, annual_revenue)
    per_department_cost_monthly = config.per_department * department_count
    total_fixed_monthly = config.fixed_monthly + per_department_cost_monthly
    total_fixed_yearly = total_fixed_monthly * MONTHS_PER_YEAR
    revenue_cost = annual_revenue * resolution.effective_rate
    total_yearly = total_fixed_yearly + revenue_cost

    return ScalePricingResult(
        tier=resolution.tier.tier,
        tier_take_rate=resolution.effective_rate,
        fixed_cost_monthly=config.fixed_monthly,
        per_department_cost_monthly=per_department_cost_monthly,
        total_fixed_monthly=total_fixed_monthly,
        total_fixed_yearly=total_fixed_yearly,
        revenue_cost=revenue_cost,
        total_yearly=total_yearly,
        effective_rate=total_yearly / annual_revenue if annual_revenue > 0 else 0.0,
        department_count=department_count,
    )


def compare_pricing(
    annual_revenue: float,
    department_count: int,
    launch_config: LaunchConfig | None = None,
    scale_config: ScaleConfig | None = None,
    scale_tiers: Sequence[ScaleTier] | None = None,
) -> PricingComparison:
    """Price both plans and recommend the cheaper one (Launch wins ties)."""
    launch = calculate_launch_pricing(annual_revenue, launch_config)
    scale = calculate_scale_pricing(annual_revenue, department_count, scale_config, scale_tiers)

    recommendation = "launch" if launch.total_yearly <= scale.total_yearly else "scale"
    cheaper = min(launch.total_yearly, scale.total_yearly)
    dearer = max(launch.total_yearly, scale.total_yearly)
    savings_amount = dearer - cheaper

    return PricingComparison(
        launch=launch,
        scale=scale,
        recommendation=recommendation,
        savings_amount=savings_amount,
        savings_percentage=savings_amount / dearer if dearer > 0 else 0.0,
    )
