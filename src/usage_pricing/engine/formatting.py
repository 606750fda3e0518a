"""Currency and percentage formatting.

Locale data (grouping, decimal mark, symbol placement, compact suffixes)
comes from CLDR via Babel, using the locale registered for each currency.
"""

from __future__ import annotations

import copy

from babel import Locale
from babel.numbers import format_compact_currency as _babel_compact, get_currency_precision

from usage_pricing.config.currency import DEFAULT_CURRENCY_REGISTRY, CurrencyConfig, CurrencyRegistry
from usage_pricing.config.types import validate_amount, validate_count

COMPACT_MIN_AMOUNT = 1_000


def _locale_for(currency: CurrencyConfig) -> Locale:
    return Locale.parse(currency.locale, sep="-")


def format_currency(
    amount: float,
    currency_code: str | None = None,
    compact: bool = False,
    max_fraction_digits: int = 0,
    registry: CurrencyRegistry = DEFAULT_CURRENCY_REGISTRY,
) -> str:
    """Format ``amount`` (already in ``currency_code`` units) for display.

    ``compact`` switches to short notation (``€1M``, ``12 k kr``) once the
    amount reaches 1 000.  Fraction digits are capped at
    ``max_fraction_digits``; the minimum is the currency's own precision,
    capped the same way, so ``max_fraction_digits=0`` gives whole units.
    """
    amount = validate_amount(amount)
    max_fraction_digits = validate_count(max_fraction_digits)
    currency = registry.get(currency_code)
    locale = _locale_for(currency)

    if compact and amount >= COMPACT_MIN_AMOUNT:
        return _babel_compact(
            amount, currency.code, locale=locale, fraction_digits=max_fraction_digits,
        )

    pattern = copy.copy(locale.currency_formats["standard"])
    min_digits = min(get_currency_precision(currency.code), max_fraction_digits)
    pattern.frac_prec = (min_digits, max_fraction_digits)
    return pattern.apply(amount, locale, currency=currency.code, currency_digits=False)


def format_compact_currency(
    amount: float,
    currency_code: str | None = None,
    registry: CurrencyRegistry = DEFAULT_CURRENCY_REGISTRY,
) -> str:
    """Shorthand for ``format_currency(..., compact=True)``."""
    return format_currency(amount, currency_code, compact=True, registry=registry)


def format_percentage(value: float, decimals: int = 1) -> str:
    """0.015 → ``"1.5%"`` (value × 100, fixed to ``decimals`` places)."""
    value = validate_amount(value)
    decimals = validate_count(decimals)
    return f"{value * 100:.{decimals}f}%"


def format_revenue(
    amount: float,
    currency_code: str | None = None,
    registry: CurrencyRegistry = DEFAULT_CURRENCY_REGISTRY,
) -> str:
    """Short revenue label with the registry symbol: ``€1.2M``, ``€350K``, ``€2.5B``.

    Ignores the currency's locale; the symbol always leads.
    """
    amount = validate_amount(amount)
    symbol = registry.get(currency_code).symbol
    if amount >= 1_000_000_000:
        return f"{symbol}{amount / 1_000_000_000:.1f}B"
    if amount >= 1_000_000:
        return f"{symbol}{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{symbol}{amount / 1_000:.0f}K"
    return f"{symbol}{amount:.0f}"
