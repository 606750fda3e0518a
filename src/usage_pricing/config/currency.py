"""Currency registry — code → symbol, locale, conversion rate, display cap.

Rates are quoted against the base currency (EUR by default): an amount in
base units times ``conversion_rate`` gives the amount in that currency.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from usage_pricing.config.types import Money

logger = logging.getLogger(__name__)


class CurrencyConfig(BaseModel):
    """One supported display currency."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=3, max_length=3, description="ISO 4217 code, e.g. 'NOK'")
    symbol: str = Field(min_length=1, description="Short display symbol")
    locale: str = Field(description="BCP 47 locale used for formatting, e.g. 'nb-NO'")
    conversion_rate: float = Field(
        gt=0, allow_inf_nan=False,
        description="Units of this currency per one base-currency unit. Base = 1.0.",
    )
    max_revenue: Money = Field(description="Upper bound for revenue inputs in this currency")
    name: str = Field(default="", description="Human label")


class CurrencyRegistry(BaseModel):
    """Read-only table of supported currencies with exactly one base entry.

    Lookups of unknown codes fall back to the base currency instead of
    raising.  Use :meth:`with_overrides` to derive an extended registry.
    """

    model_config = ConfigDict(frozen=True)

    base_code: str = Field(default="EUR", description="Code of the base currency")
    currencies: tuple[CurrencyConfig, ...]

    @model_validator(mode="after")
    def _check_base(self) -> "CurrencyRegistry":
        codes = [c.code for c in self.currencies]
        if len(set(codes)) != len(codes):
            raise ValueError(f"duplicate currency codes in registry: {codes}")
        if self.base_code not in codes:
            raise ValueError(f"base currency {self.base_code!r} is not registered")
        base_entries = [c.code for c in self.currencies if c.conversion_rate == 1.0]
        if base_entries != [self.base_code]:
            raise ValueError(
                f"exactly one currency (the base {self.base_code!r}) must have "
                f"conversion_rate == 1, found {base_entries}"
            )
        return self

    def __len__(self) -> int:
        return len(self.currencies)

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, str):
            return False
        return any(c.code == code.upper() for c in self.currencies)

    def codes(self) -> list[str]:
        return [c.code for c in self.currencies]

    @property
    def base(self) -> CurrencyConfig:
        return self.get(self.base_code)

    def get(self, code: str | None = None) -> CurrencyConfig:
        """Return the config for ``code``; unknown or missing codes give the base entry."""
        wanted = (code or self.base_code).upper()
        for currency in self.currencies:
            if currency.code == wanted:
                return currency
        logger.debug("Unknown currency %r, falling back to %s", code, self.base_code)
        for currency in self.currencies:
            if currency.code == self.base_code:
                return currency
        raise LookupError(self.base_code)  # guarded by _check_base

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> "CurrencyRegistry":
        """Return a new registry with entries replaced or added by code.

        ``overrides`` maps code → partial field dict.  Existing entries are
        updated field-by-field; unknown codes must supply every required field.
        """
        merged: dict[str, dict[str, Any]] = {c.code: c.model_dump() for c in self.currencies}
        for code, fields in overrides.items():
            key = code.upper()
            entry = merged.get(key, {"code": key})
            merged[key] = {**entry, **fields, "code": key}
        return CurrencyRegistry(
            base_code=self.base_code,
            currencies=tuple(CurrencyConfig(**entry) for entry in merged.values()),
        )


DEFAULT_CURRENCY = "EUR"

DEFAULT_CURRENCY_REGISTRY = CurrencyRegistry(
    base_code=DEFAULT_CURRENCY,
    currencies=(
        CurrencyConfig(code="EUR", symbol="€", locale="en-IE", conversion_rate=1.0,
                       max_revenue=200_000_000, name="Euro"),
        CurrencyConfig(code="USD", symbol="$", locale="en-US", conversion_rate=1.10,
                       max_revenue=220_000_000, name="US Dollar"),
        CurrencyConfig(code="GBP", symbol="£", locale="en-GB", conversion_rate=0.85,
                       max_revenue=170_000_000, name="British Pound"),
        CurrencyConfig(code="SEK", symbol="kr", locale="sv-SE", conversion_rate=11.5,
                       max_revenue=2_300_000_000, name="Swedish Krona"),
        CurrencyConfig(code="DKK", symbol="kr", locale="da-DK", conversion_rate=7.45,
                       max_revenue=1_490_000_000, name="Danish Krone"),
        CurrencyConfig(code="NOK", symbol="kr", locale="nb-NO", conversion_rate=11.5,
                       max_revenue=2_300_000_000, name="Norwegian Krone"),
        CurrencyConfig(code="CHF", symbol="Fr", locale="de-CH", conversion_rate=0.95,
                       max_revenue=190_000_000, name="Swiss Franc"),
        CurrencyConfig(code="PLN", symbol="zł", locale="pl-PL", conversion_rate=4.30,
                       max_revenue=860_000_000, name="Polish Zloty"),
    ),
)
