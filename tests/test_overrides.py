"""Tests for config/overrides.py — building pricing from stored override rows."""

from __future__ import annotations

import logging

import pytest

from usage_pricing.config import (
    DEFAULT_CURRENCY_REGISTRY,
    LaunchConfig,
    PricingConfig,
    ScaleConfig,
    TierScheduleConfig,
)
from usage_pricing.config.overrides import (
    launch_config_from_rows,
    load_pricing_config,
    registry_from_rows,
    scale_config_from_rows,
    scale_tiers_from_rows,
)
from usage_pricing.engine.tiers import generate_scale_tiers


TIER_CONFIG_ROWS = [
    {"tier_type": "launch", "fixed_monthly_cost": "600", "revenue_percentage": "0.025",
     "per_department_cost": None, "is_active": True},
    {"tier_type": "scale", "fixed_monthly_cost": "1200", "revenue_percentage": "0.018",
     "per_department_cost": "150", "is_active": True},
]

SCALE_TIER_ROWS = [
    {"tier_number": 2, "revenue_threshold": "2000000", "take_rate": "0.012",
     "revenue_multiplier": "2", "rate_reduction": "0.001"},
    {"tier_number": 1, "revenue_threshold": "1000000", "take_rate": "0.013",
     "revenue_multiplier": None, "rate_reduction": 0},
]


class TestPlanRows:

    def test_launch_row_applied(self):
        cfg = launch_config_from_rows(TIER_CONFIG_ROWS)
        assert cfg == LaunchConfig(fixed_monthly=600, revenue_percentage=0.025)

    def test_scale_row_applied(self):
        cfg = scale_config_from_rows(TIER_CONFIG_ROWS)
        assert cfg == ScaleConfig(fixed_monthly=1_200, per_department=150, base_take_rate=0.018)

    def test_missing_rows_fall_back_to_defaults(self):
        assert launch_config_from_rows([]) == LaunchConfig()
        assert scale_config_from_rows([]) == ScaleConfig()

    def test_inactive_rows_ignored(self):
        rows = [{**row, "is_active": False} for row in TIER_CONFIG_ROWS]
        assert launch_config_from_rows(rows) == LaunchConfig()

    def test_invalid_row_falls_back_with_warning(self, caplog):
        rows = [{"tier_type": "scale", "fixed_monthly_cost": "-5",
                 "revenue_percentage": "0.01", "per_department_cost": "100"}]
        with caplog.at_level(logging.WARNING, logger="usage_pricing.config.overrides"):
            cfg = scale_config_from_rows(rows)
        assert cfg == ScaleConfig()
        assert "Ignoring invalid scale config row" in caplog.text

    def test_row_missing_column_falls_back(self):
        rows = [{"tier_type": "launch", "fixed_monthly_cost": 600}]
        assert launch_config_from_rows(rows) == LaunchConfig()

    def test_scale_rate_below_floor_falls_back(self, caplog):
        rows = [{"tier_type": "scale", "fixed_monthly_cost": 1_000,
                 "revenue_percentage": 0.005, "per_department_cost": 100}]
        with caplog.at_level(logging.WARNING, logger="usage_pricing.config.overrides"):
            cfg = scale_config_from_rows(rows)
        assert cfg == ScaleConfig()
        assert "below the rate floor" in caplog.text


class TestTierRows:

    def test_rows_sorted_by_tier_number(self):
        tiers = scale_tiers_from_rows(SCALE_TIER_ROWS)
        assert [t.tier for t in tiers] == [1, 2]
        assert tiers[0].revenue_threshold == 1_000_000
        assert tiers[0].take_rate == pytest.approx(0.013)

    def test_falsy_steps_become_none(self):
        first = scale_tiers_from_rows(SCALE_TIER_ROWS)[0]
        assert first.revenue_multiplier is None
        assert first.rate_reduction is None

    def test_empty_rows_return_none(self):
        assert scale_tiers_from_rows([]) is None

    def test_invalid_row_skipped(self):
        rows = SCALE_TIER_ROWS + [{"tier_number": 3, "revenue_threshold": "x", "take_rate": "0.01"}]
        assert len(scale_tiers_from_rows(rows)) == 2


class TestCurrencyRows:

    def test_override_and_add(self):
        registry = registry_from_rows([
            {"code": "NOK", "conversion_rate": 11.8},
            {"code": "JPY", "symbol": "¥", "locale": "ja-JP", "conversion_rate": 160,
             "max_revenue": 32_000_000_000, "name": "Japanese Yen", "is_active": True},
        ])
        assert registry.get("NOK").conversion_rate == 11.8
        assert registry.get("JPY").symbol == "¥"

    def test_invalid_row_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="usage_pricing.config.overrides"):
            registry = registry_from_rows([
                {"code": "USD", "conversion_rate": -1},
                {"symbol": "?"},
                {"code": "GBP", "conversion_rate": 0.9},
            ])
        assert registry.get("USD").conversion_rate == 1.10
        assert registry.get("GBP").conversion_rate == 0.9
        assert caplog.text.count("Ignoring") == 2

    def test_no_rows_keeps_base(self):
        assert registry_from_rows([]) == DEFAULT_CURRENCY_REGISTRY


class TestLoadPricingConfig:

    def test_all_defaults(self):
        resolved = load_pricing_config()
        assert resolved.launch == LaunchConfig()
        assert resolved.scale == ScaleConfig()
        assert resolved.scale_tiers == generate_scale_tiers()
        assert resolved.currencies == DEFAULT_CURRENCY_REGISTRY

    def test_generated_tiers_follow_overridden_scale(self):
        resolved = load_pricing_config(tier_config_rows=TIER_CONFIG_ROWS)
        assert resolved.scale_tiers[0].take_rate == pytest.approx(0.018)
        assert resolved.scale_tiers[1].take_rate == pytest.approx(0.017)
        assert len(resolved.scale_tiers) == 15

    def test_stored_tiers_win(self):
        resolved = load_pricing_config(TIER_CONFIG_ROWS, SCALE_TIER_ROWS)
        assert len(resolved.scale_tiers) == 2
        assert resolved.scale_tiers[1].take_rate == pytest.approx(0.012)

    def test_defaults_bundle_respected(self):
        resolved = load_pricing_config(defaults=PricingConfig(tier_count=5))
        assert len(resolved.scale_tiers) == 5

    def test_accepts_generators(self):
        resolved = load_pricing_config(
            tier_config_rows=(row for row in TIER_CONFIG_ROWS),
            scale_tier_rows=iter(SCALE_TIER_ROWS),
        )
        assert resolved.launch.fixed_monthly == 600

    def test_scale_rate_below_floor_keeps_default_ladder(self, caplog):
        rows = [
            {"tier_type": "launch", "fixed_monthly_cost": 600, "revenue_percentage": 0.025},
            {"tier_type": "scale", "fixed_monthly_cost": 1_000,
             "revenue_percentage": 0.005, "per_department_cost": 100},
        ]
        with caplog.at_level(logging.WARNING, logger="usage_pricing.config.overrides"):
            resolved = load_pricing_config(tier_config_rows=rows)
        assert resolved.scale == ScaleConfig()
        assert resolved.scale_tiers == generate_scale_tiers()
        assert resolved.launch.fixed_monthly == 600
        assert "Ignoring invalid scale config row" in caplog.text

    def test_floor_comes_from_defaults_schedule(self):
        rows = [{"tier_type": "scale", "fixed_monthly_cost": 1_000,
                 "revenue_percentage": 0.009, "per_department_cost": 100}]
        defaults = PricingConfig(schedule=TierScheduleConfig(rate_floor=0.01))
        resolved = load_pricing_config(tier_config_rows=rows, defaults=defaults)
        assert resolved.scale == ScaleConfig()
        assert resolved.scale_tiers[-1].take_rate == pytest.approx(0.01)
