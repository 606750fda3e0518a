"""Shared numeric field types for money and rates.

``Money`` and ``Rate`` are annotated floats so the same constraints apply to
config model fields and to bare function arguments (via ``TypeAdapter``).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, TypeAdapter

Money = Annotated[float, Field(ge=0, allow_inf_nan=False)]
"""Non-negative, finite amount in base-currency units."""

Rate = Annotated[float, Field(ge=0, le=1.0, allow_inf_nan=False)]
"""Fraction in [0, 1] — 0.015 means 1.5%."""

Amount = Annotated[float, Field(allow_inf_nan=False)]
"""Any finite amount (formatting and conversion accept negatives)."""

_MONEY = TypeAdapter(Money)
_AMOUNT = TypeAdapter(Amount)
_COUNT = TypeAdapter(Annotated[int, Field(ge=0)])


def validate_money(value: float) -> float:
    """Return ``value`` as float or raise ``ValidationError`` if negative / non-finite."""
    return _MONEY.validate_python(value)


def validate_amount(value: float) -> float:
    """Return ``value`` as float or raise ``ValidationError`` if non-finite."""
    return _AMOUNT.validate_python(value)


def validate_count(value: int) -> int:
    """Return ``value`` or raise ``ValidationError`` if it is a negative integer."""
    return _COUNT.validate_python(value)
