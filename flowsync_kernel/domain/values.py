"""
Decimal helpers for hours, rates and money.

All quantities in FlowSync are ``Decimal``.  Arithmetic is exact; rounding
happens only when a caller asks for a display amount.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

_TWO_PLACES = Decimal("0.01")


def to_decimal(value: Decimal | int | str) -> Decimal:
    """Coerce an int/str/Decimal to ``Decimal``.  Floats are rejected."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Refusing to build Decimal from {type(value).__name__}: {value!r}")
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc


def round_money(amount: Decimal) -> Decimal:
    """Round to cents (ROUND_HALF_UP) for display or invoicing."""
    return amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def percentage(numerator: Decimal, denominator: Decimal) -> Decimal:
    """``numerator / denominator * 100``; a zero denominator yields zero."""
    if denominator == 0:
        return ZERO
    return numerator / denominator * HUNDRED
