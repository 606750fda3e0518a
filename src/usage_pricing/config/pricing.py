"""Top-level pricing bundle — plans, tier schedule shape, and currencies."""

from pydantic import BaseModel, ConfigDict, Field

from usage_pricing.config.currency import DEFAULT_CURRENCY_REGISTRY, CurrencyRegistry
from usage_pricing.config.plans import LaunchConfig, ScaleConfig
from usage_pricing.config.schedule import MAX_TIER_COUNT, TierScheduleConfig


class PricingConfig(BaseModel):
    """Complete input bundle for pricing one customer.

    Assembled once per request/session and passed by value; every section
    falls back to the built-in defaults.
    """

    model_config = ConfigDict(frozen=True)

    launch: LaunchConfig = Field(default_factory=LaunchConfig)
    scale: ScaleConfig = Field(default_factory=ScaleConfig)
    tier_count: int = Field(default=15, ge=0, le=MAX_TIER_COUNT, description="Number of Scale tiers to generate")
    schedule: TierScheduleConfig = Field(default_factory=TierScheduleConfig)
    currencies: CurrencyRegistry = Field(default=DEFAULT_CURRENCY_REGISTRY)
