"""Decimal helpers for invoice arithmetic.

Amounts are kept as unrounded ``Decimal`` values inside the aggregator and
only quantized to the currency's minor unit when they are displayed,
printed or exported.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from qryte.config import CURRENCY_SYMBOL

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: object) -> Decimal:
    """
    Convert a price-like value to ``Decimal`` without float drift.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.

    Raises:
        ValueError: if the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not a monetary value: {value!r}")
    if isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"not a monetary value: {value!r}") from exc
        if not result.is_finite():
            raise ValueError(f"not a monetary value: {value!r}")
        return result
    raise ValueError(f"not a monetary value: {value!r}")


def quantize(amount: Decimal) -> Decimal:
    """Round to two decimal places using banker's rounding."""
    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)


def format_money(amount: Decimal, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol}{quantize(amount):,.2f}"


def format_rate(rate: Decimal) -> str:
    """Render a rate such as ``Decimal("0.12")`` as ``12%``."""
    percent = (rate * 100).normalize()
    return f"{percent:f}%"
