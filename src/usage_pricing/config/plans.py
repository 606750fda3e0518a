"""Plan configuration — the flat Launch plan and the tiered Scale plan."""

from pydantic import BaseModel, ConfigDict, Field

from usage_pricing.config.types import Money, Rate


class LaunchConfig(BaseModel):
    """Flat plan: fixed monthly fee plus a fixed share of revenue."""

    model_config = ConfigDict(frozen=True)

    fixed_monthly: Money = Field(default=500.0, description="Fixed fee per month (base currency)")
    revenue_percentage: Rate = Field(
        default=0.03,
        description="Share of annual revenue charged (0.03 = 3%).",
    )


class ScaleConfig(BaseModel):
    """Tiered plan seed: fixed fee, per-department fee, and the tier-1 take rate."""

    model_config = ConfigDict(frozen=True)

    fixed_monthly: Money = Field(default=1_000.0, description="Fixed fee per month (base currency)")
    per_department: Money = Field(default=100.0, description="Fee per department per month")
    base_take_rate: Rate = Field(
        default=0.015,
        description="Take rate of tier 1. Later tiers decay from here "
                    "down to the schedule's rate floor.",
    )
