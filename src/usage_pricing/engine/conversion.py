"""Currency conversion against the registry's base currency."""

from __future__ import annotations

from usage_pricing.config.currency import DEFAULT_CURRENCY_REGISTRY, CurrencyRegistry
from usage_pricing.config.types import validate_amount


def convert_from_base(
    amount: float,
    currency_code: str | None = None,
    registry: CurrencyRegistry = DEFAULT_CURRENCY_REGISTRY,
) -> float:
    """Base-currency amount → ``currency_code`` amount.

    Unknown codes fall back to the base currency (rate 1).
    """
    amount = validate_amount(amount)
    return amount * registry.get(currency_code).conversion_rate


def convert_to_base(
    amount: float,
    currency_code: str | None = None,
    registry: CurrencyRegistry = DEFAULT_CURRENCY_REGISTRY,
) -> float:
    """``currency_code`` amount → base-currency amount."""
    amount = validate_amount(amount)
    return amount / registry.get(currency_code).conversion_rate
