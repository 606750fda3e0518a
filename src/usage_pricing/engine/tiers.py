"""Scale tier schedule generation.

Pure function of (plan config, tier count, schedule rules).  Results are
immutable tuples, so generation is memoized on its hashable inputs.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from usage_pricing.config.plans import ScaleConfig
from usage_pricing.config.schedule import MAX_TIER_COUNT, TierScheduleConfig
from usage_pricing.models.results import ScaleTier

logger = logging.getLogger(__name__)

DEFAULT_TIER_COUNT = 15
_DEFAULT_SCHEDULE = TierScheduleConfig()


def generate_scale_tiers(
    config: ScaleConfig | None = None,
    tier_count: int = DEFAULT_TIER_COUNT,
    schedule: TierScheduleConfig | None = None,
) -> tuple[ScaleTier, ...]:
    """Build the Scale plan's tier ladder.

    Tier 1 starts at ``schedule.initial_threshold`` with ``config.base_take_rate``.
    Each following tier multiplies the threshold and lowers the rate by the
    step of the rule that covers it, never dropping below ``schedule.rate_floor``.

    Returns an empty tuple when ``tier_count < 1``.  Raises ``ValueError``
    when ``tier_count`` exceeds ``MAX_TIER_COUNT`` (100), or when the base
    take rate sits below the floor, since the ladder would otherwise have to
    climb back up to it.
    """
    if tier_count < 1:
        return ()
    if tier_count > MAX_TIER_COUNT:
        raise ValueError(f"tier_count {tier_count} exceeds the maximum of {MAX_TIER_COUNT}")
    config = config or ScaleConfig()
    schedule = schedule or _DEFAULT_SCHEDULE
    if config.base_take_rate < schedule.rate_floor:
        raise ValueError(
            f"base_take_rate {config.base_take_rate} is below the rate floor {schedule.rate_floor}"
        )
    return _generate(config, tier_count, schedule)


@lru_cache(maxsize=128)
def _generate(
    config: ScaleConfig,
    tier_count: int,
    schedule: TierScheduleConfig,
) -> tuple[ScaleTier, ...]:
    logger.debug(
        "Generating %d scale tiers from base rate %.4f", tier_count, config.base_take_rate,
    )
    threshold = schedule.initial_threshold
    rate = config.base_take_rate
    tiers: list[ScaleTier] = []

    for number in range(1, tier_count + 1):
        rule = schedule.rule_for(number)
        if number > 1:
            threshold *= rule.revenue_multiplier
            # Rounded to 10 places so 0.015 - 0.001 lands on 0.014 exactly.
            rate = round(max(rate - rule.rate_reduction, schedule.rate_floor), 10)

        tiers.append(ScaleTier(
            tier=number,
            revenue_threshold=threshold,
            take_rate=rate,
            revenue_multiplier=rule.revenue_multiplier,
            rate_reduction=rule.rate_reduction,
        ))

    return tuple(tiers)
