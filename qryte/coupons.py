"""Coupon code lookup."""

from __future__ import annotations

from decimal import Decimal

from qryte.constant import COUPON_RATES
from qryte.money import ZERO

_RATES: dict[str, Decimal] = {code: Decimal(rate) for code, rate in COUPON_RATES.items()}


def resolve(code: str | None) -> Decimal:
    """Return the discount rate for ``code``; unknown or empty codes map to 0."""
    if not code:
        return ZERO
    return _RATES.get(code, ZERO)


def is_known_coupon(code: str | None) -> bool:
    return resolve(code) > 0
