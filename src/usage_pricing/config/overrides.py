"""Build pricing configuration from externally stored override rows.

The marketing site keeps editable pricing in three tables
(``pricing_tiers_config``, ``pricing_scale_tiers``, and a currency table).
Callers fetch the rows themselves and pass them in as plain mappings; this
module only maps columns onto config models and falls back to the built-in
defaults for anything missing.  A row that fails validation is skipped
with a warning, never partially applied.

Import from ``usage_pricing.config.overrides`` directly; the package
``__init__`` must not pull in the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from usage_pricing.config.currency import DEFAULT_CURRENCY_REGISTRY, CurrencyRegistry
from usage_pricing.config.plans import LaunchConfig, ScaleConfig
from usage_pricing.config.pricing import PricingConfig
from usage_pricing.config.schedule import TierScheduleConfig
from usage_pricing.engine.tiers import generate_scale_tiers
from usage_pricing.models.results import ScaleTier

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class ResolvedPricing(BaseModel):
    """Everything a pricing page needs, with overrides applied."""

    model_config = ConfigDict(frozen=True)

    launch: LaunchConfig
    scale: ScaleConfig
    scale_tiers: tuple[ScaleTier, ...]
    currencies: CurrencyRegistry


def _active(rows: Iterable[Row]) -> list[Row]:
    return [r for r in rows if r.get("is_active", True)]


def _find_plan_row(rows: Iterable[Row], tier_type: str) -> Row | None:
    for row in _active(rows):
        if row.get("tier_type") == tier_type:
            return row
    return None


def launch_config_from_rows(
    rows: Iterable[Row],
    default: LaunchConfig | None = None,
) -> LaunchConfig:
    """Launch plan from the active ``tier_type='launch'`` row, else ``default``."""
    default = default or LaunchConfig()
    row = _find_plan_row(rows, "launch")
    if row is None:
        return default
    try:
        return LaunchConfig(
            fixed_monthly=row["fixed_monthly_cost"],
            revenue_percentage=row["revenue_percentage"],
        )
    except (KeyError, ValidationError) as exc:
        logger.warning("Ignoring invalid launch config row %r: %s", row, exc)
        return default


def scale_config_from_rows(
    rows: Iterable[Row],
    default: ScaleConfig | None = None,
    schedule: TierScheduleConfig | None = None,
) -> ScaleConfig:
    """Scale plan from the active ``tier_type='scale'`` row, else ``default``.

    A row whose base take rate sits below ``schedule.rate_floor`` cannot seed
    a tier ladder and is rejected like any other invalid row.
    """
    default = default or ScaleConfig()
    schedule = schedule or TierScheduleConfig()
    row = _find_plan_row(rows, "scale")
    if row is None:
        return default
    try:
        config = ScaleConfig(
            fixed_monthly=row["fixed_monthly_cost"],
            per_department=row["per_department_cost"],
            base_take_rate=row["revenue_percentage"],
        )
    except (KeyError, ValidationError) as exc:
        logger.warning("Ignoring invalid scale config row %r: %s", row, exc)
        return default
    if config.base_take_rate < schedule.rate_floor:
        logger.warning(
            "Ignoring invalid scale config row %r: base take rate is below the rate floor %s",
            row, schedule.rate_floor,
        )
        return default
    return config


def scale_tiers_from_rows(rows: Iterable[Row]) -> tuple[ScaleTier, ...] | None:
    """Stored tier ladder ordered by ``tier_number``, or None when nothing usable is stored."""
    tiers: list[ScaleTier] = []
    for row in rows:
        try:
            tiers.append(ScaleTier(
                tier=row["tier_number"],
                revenue_threshold=row["revenue_threshold"],
                take_rate=row["take_rate"],
                revenue_multiplier=row.get("revenue_multiplier") or None,
                rate_reduction=row.get("rate_reduction") or None,
            ))
        except (KeyError, ValidationError) as exc:
            logger.warning("Ignoring invalid scale tier row %r: %s", row, exc)
    if not tiers:
        return None
    return tuple(sorted(tiers, key=lambda t: t.tier))


def registry_from_rows(
    rows: Iterable[Row],
    base: CurrencyRegistry = DEFAULT_CURRENCY_REGISTRY,
) -> CurrencyRegistry:
    """Apply currency rows (keyed by ``code``) on top of ``base``."""
    registry = base
    for row in _active(rows):
        fields = {k: v for k, v in row.items() if k not in ("code", "is_active")}
        code = row.get("code")
        if not code:
            logger.warning("Ignoring currency row without a code: %r", row)
            continue
        try:
            registry = registry.with_overrides({code: fields})
        except ValidationError as exc:
            logger.warning("Ignoring invalid currency row %r: %s", row, exc)
    return registry


def load_pricing_config(
    tier_config_rows: Iterable[Row] = (),
    scale_tier_rows: Iterable[Row] = (),
    currency_rows: Iterable[Row] = (),
    defaults: PricingConfig | None = None,
) -> ResolvedPricing:
    """Assemble plans, tier ladder, and currencies from override rows.

    When no tier rows are stored the ladder is generated from the (possibly
    overridden) Scale plan.
    """
    defaults = defaults or PricingConfig()
    tier_config_rows = list(tier_config_rows)

    launch = launch_config_from_rows(tier_config_rows, defaults.launch)
    scale = scale_config_from_rows(tier_config_rows, defaults.scale, defaults.schedule)
    tiers = scale_tiers_from_rows(scale_tier_rows)
    if tiers is None:
        tiers = generate_scale_tiers(scale, defaults.tier_count, defaults.schedule)
    currencies = registry_from_rows(currency_rows, defaults.currencies)

    return ResolvedPricing(launch=launch, scale=scale, scale_tiers=tiers, currencies=currencies)
