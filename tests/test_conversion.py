"""Tests for engine/conversion.py — base-currency conversion."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from usage_pricing.config import DEFAULT_CURRENCY_REGISTRY
from usage_pricing.engine.conversion import convert_from_base, convert_to_base


def test_from_base_nok():
    assert convert_from_base(100, "NOK") == 1150


def test_to_base_nok():
    assert convert_to_base(1150, "NOK") == pytest.approx(100)


def test_base_currency_is_identity():
    assert convert_from_base(1234.5, "EUR") == 1234.5
    assert convert_to_base(1234.5, "EUR") == 1234.5


def test_lowercase_code():
    assert convert_from_base(100, "usd") == pytest.approx(110)


@pytest.mark.parametrize("code", ["XYZ", "", None])
def test_unknown_code_falls_back_to_base(code):
    assert convert_from_base(250, code) == 250
    assert convert_to_base(250, code) == 250


def test_custom_registry():
    registry = DEFAULT_CURRENCY_REGISTRY.with_overrides({"NOK": {"conversion_rate": 12.0}})
    assert convert_from_base(100, "NOK", registry) == pytest.approx(1200)
    # Default registry untouched
    assert convert_from_base(100, "NOK") == pytest.approx(1150)


@pytest.mark.parametrize("code", DEFAULT_CURRENCY_REGISTRY.codes())
@pytest.mark.parametrize("amount", [0, 1, 99.99, 1_000_000, 2.5e9, -42.0])
def test_round_trip(code, amount):
    assert convert_to_base(convert_from_base(amount, code), code) == pytest.approx(amount)


@pytest.mark.parametrize("amount", [math.inf, -math.inf, math.nan])
def test_non_finite_rejected(amount):
    with pytest.raises(ValidationError):
        convert_from_base(amount, "EUR")
    with pytest.raises(ValidationError):
        convert_to_base(amount, "EUR")
