"""Shared test fixtures — default plans, tier ladder, and currency registry."""

from __future__ import annotations

import pytest

from usage_pricing.config import (
    DEFAULT_CURRENCY_REGISTRY,
    CurrencyRegistry,
    LaunchConfig,
    ScaleConfig,
)
from usage_pricing.engine.tiers import generate_scale_tiers
from usage_pricing.models.results import ScaleTier


@pytest.fixture
def launch_config() -> LaunchConfig:
    return LaunchConfig(fixed_monthly=500, revenue_percentage=0.03)


@pytest.fixture
def scale_config() -> ScaleConfig:
    return ScaleConfig(fixed_monthly=1_000, per_department=100, base_take_rate=0.015)


@pytest.fixture
def tiers(scale_config: ScaleConfig) -> tuple[ScaleTier, ...]:
    return generate_scale_tiers(scale_config, 15)


@pytest.fixture
def registry() -> CurrencyRegistry:
    return DEFAULT_CURRENCY_REGISTRY
