"""Runtime configuration defaults for billing, persistence and printing."""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation


def _env_tax_rate(default: str) -> Decimal:
    raw = os.environ.get("QRYTE_TAX_RATE", "").strip() or default
    try:
        rate = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"QRYTE_TAX_RATE must be a decimal number, got {raw!r}") from exc
    if not (0 <= rate < 1):
        raise ValueError(f"QRYTE_TAX_RATE must be in [0, 1), got {raw!r}")
    return rate


DB_PATH = os.environ.get("QRYTE_DB_PATH", "").strip() or "data/qryte.db"
DEBUG_LOG_PATH = os.environ.get("QRYTE_DEBUG_LOG", "").strip() or "/tmp/qryte-debug.log"

# Single GST rate applied to the discounted subtotal.
TAX_RATE = _env_tax_rate("0.12")
CURRENCY_SYMBOL = "₹"

ACTIVITY_FEED_LIMIT = 50

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
