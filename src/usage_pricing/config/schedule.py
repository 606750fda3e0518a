"""Tier schedule rules — how thresholds grow and take rates decay.

Each ``TierRule`` covers a contiguous range of tier numbers.  The rule that
matches tier ``n`` describes how tier ``n`` is derived from tier ``n − 1``:

    threshold(n) = threshold(n − 1) × revenue_multiplier
    take_rate(n) = max(take_rate(n − 1) − rate_reduction, rate_floor)

Tier 1 has no predecessor; its rule carries ``None`` for both fields and
the tier starts at ``initial_threshold`` with the plan's base take rate.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from usage_pricing.config.types import Money, Rate


class TierRule(BaseModel):
    """Growth/decay step applied to every tier in ``[first_tier, last_tier]``."""

    model_config = ConfigDict(frozen=True)

    first_tier: int = Field(ge=1, description="First tier number this rule applies to")
    last_tier: int | None = Field(
        default=None, ge=1,
        description="Last tier number (inclusive). None = open-ended.",
    )
    revenue_multiplier: float | None = Field(
        default=None, gt=1.0, allow_inf_nan=False,
        description="Threshold growth factor from the previous tier. "
                    "Must be > 1 so thresholds stay strictly increasing.",
    )
    rate_reduction: Rate | None = Field(
        default=None,
        description="Absolute take-rate decrease from the previous tier (0.001 = 0.1 pp).",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "TierRule":
        if self.last_tier is not None and self.last_tier < self.first_tier:
            raise ValueError("last_tier must be >= first_tier")
        if self.first_tier > 1 and (self.revenue_multiplier is None or self.rate_reduction is None):
            raise ValueError("rules after tier 1 need both revenue_multiplier and rate_reduction")
        return self

    def matches(self, tier: int) -> bool:
        return self.first_tier <= tier and (self.last_tier is None or tier <= self.last_tier)


MAX_TIER_COUNT = 100
"""Longest ladder ``generate_scale_tiers`` accepts."""

DEFAULT_TIER_RULES: tuple[TierRule, ...] = (
    TierRule(first_tier=1, last_tier=1),
    TierRule(first_tier=2, last_tier=2, revenue_multiplier=2.0, rate_reduction=0.001),
    TierRule(first_tier=3, last_tier=3, revenue_multiplier=1.5, rate_reduction=0.001),
    TierRule(first_tier=4, revenue_multiplier=1.5, rate_reduction=0.0005),
)


class TierScheduleConfig(BaseModel):
    """Shape of the Scale plan's tier ladder."""

    model_config = ConfigDict(frozen=True)

    initial_threshold: Money = Field(
        default=1_000_000.0, gt=0,
        description="Annual revenue at which tier 1 starts (base currency).",
    )
    rate_floor: Rate = Field(
        default=0.007,
        description="Take rate never decays below this (0.007 = 0.7%).",
    )
    rules: tuple[TierRule, ...] = Field(
        default=DEFAULT_TIER_RULES,
        description="Ordered rules; the first rule matching a tier number wins.",
    )

    @model_validator(mode="after")
    def _check_rules(self) -> "TierScheduleConfig":
        if not self.rules or not self.rules[0].matches(1):
            raise ValueError("the first rule must cover tier 1")
        for prev, rule in zip(self.rules, self.rules[1:]):
            if prev.last_tier is None or rule.first_tier != prev.last_tier + 1:
                raise ValueError(
                    f"rules must be contiguous: rule starting at tier {rule.first_tier} "
                    f"does not follow rule ending at {prev.last_tier}"
                )
        if self.rules[-1].last_tier is not None:
            raise ValueError("the last rule must be open-ended (last_tier=None)")
        return self

    def rule_for(self, tier: int) -> TierRule:
        """Return the rule covering ``tier``."""
        for rule in self.rules:
            if rule.matches(tier):
                return rule
        raise LookupError(f"no tier rule covers tier {tier}")
