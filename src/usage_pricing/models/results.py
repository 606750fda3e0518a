"""Result types — the contract between the pricing engine and its callers.

Every result is a frozen pydantic model: created fresh by the engine on
each call and never mutated afterwards.  Rates are fractions throughout
(``0.015`` = 1.5%); format them with ``format_percentage`` for display.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from usage_pricing.config.types import Money, Rate


# ═══════════════════════════════════════════════════════════════════════════
# Tier schedule
# ═══════════════════════════════════════════════════════════════════════════

class ScaleTier(BaseModel):
    """One rung of the Scale plan's revenue ladder."""

    model_config = ConfigDict(frozen=True)

    tier: int = Field(ge=1)
    revenue_threshold: Money
    """Annual revenue (base currency) from which this tier applies, inclusive."""
    take_rate: Rate
    revenue_multiplier: float | None = None
    """Threshold growth from the previous tier. None for tier 1."""
    rate_reduction: Rate | None = None
    """Take-rate decrease from the previous tier. None for tier 1."""


class TakeRateResolution(BaseModel):
    """The tier a revenue figure falls into, and the rate it pays."""

    model_config = ConfigDict(frozen=True)

    tier: ScaleTier
    effective_rate: Rate


# ═══════════════════════════════════════════════════════════════════════════
# Plan breakdowns (annual)
# ═══════════════════════════════════════════════════════════════════════════

class LaunchPricingResult(BaseModel):
    """Annual cost of the Launch plan for one revenue figure."""

    model_config = ConfigDict(frozen=True)

    type: Literal["launch"] = "launch"
    fixed_cost_monthly: float
    fixed_cost_yearly: float
    revenue_cost: float
    total_monthly: float
    total_yearly: float
    effective_rate: float
    """total_yearly / annual_revenue — 0 when revenue is 0."""


class ScalePricingResult(BaseModel):
    """Annual cost of the Scale plan for one revenue figure and department count."""

    model_config = ConfigDict(frozen=True)

    type: Literal["scale"] = "scale"
    tier: int
    tier_take_rate: float
    fixed_cost_monthly: float
    per_department_cost_monthly: float
    total_fixed_monthly: float
    total_fixed_yearly: float
    revenue_cost: float
    total_yearly: float
    effective_rate: float
    department_count: int


class PricingComparison(BaseModel):
    """Launch vs Scale side by side, with the cheaper plan recommended."""

    model_config = ConfigDict(frozen=True)

    launch: LaunchPricingResult
    scale: ScalePricingResult
    recommendation: Literal["launch", "scale"]
    savings_amount: float
    """Annual difference between the dearer and the cheaper plan."""
    savings_percentage: float
    """savings_amount as a fraction of the dearer plan's annual total."""
