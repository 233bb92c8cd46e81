"""In-progress invoice state and derived totals."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Callable
from uuid import uuid4

from qryte.config import TAX_RATE
from qryte.coupons import resolve
from qryte.errors import InvalidQuantity
from qryte.models import Invoice, LineItem, MenuItem
from qryte.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


def _new_invoice_id() -> str:
    return f"INV-{uuid4().hex[:12].upper()}"


def _check_whole(quantity: object) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"quantity must be a whole number, got {quantity!r}")


class InvoiceAggregator:
    """
    Owns the invoice for one order in progress.

    The invoice is either absent (``snapshot()`` returns ``None``) or active
    with at least one line item. Every mutation that touches quantities
    recomputes subtotal, discount, tax and total so readers always see
    consistent figures.

    Calls that need an active invoice (everything except ``add_item``) are
    silent no-ops while the invoice is absent, and so are quantity and note
    updates for menu items that are not on the invoice.
    """

    def __init__(
        self,
        tax_rate: Decimal | str | None = None,
        coupon_resolver: Callable[[str], Decimal] = resolve,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        rate = TAX_RATE if tax_rate is None else to_decimal(tax_rate)
        if not (0 <= rate < 1):
            raise ValueError(f"tax_rate must be in [0, 1), got {rate}")
        self.tax_rate = rate
        self._resolve_coupon = coupon_resolver
        self._id_factory = id_factory or _new_invoice_id

        self._invoice_id: str | None = None
        self._lines: list[LineItem] = []
        self._coupon_code: str | None = None
        self._coupon_rate: Decimal = ZERO
        self._snapshot: Invoice | None = None

    @property
    def is_active(self) -> bool:
        return self._snapshot is not None

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def snapshot(self) -> Invoice | None:
        """Return the current invoice as an immutable value, or ``None``."""
        return self._snapshot

    def add_item(self, menu_item: MenuItem, quantity: int = 1) -> Invoice:
        """Add ``quantity`` portions, merging into an existing line for the same item."""
        _check_whole(quantity)
        if quantity < 1:
            raise InvalidQuantity(f"quantity must be a positive integer, got {quantity!r}")

        if self._invoice_id is None:
            self._invoice_id = self._id_factory()
            logger.debug("invoice_open id=%s", self._invoice_id)

        idx = self._index_of(menu_item.item_id)
        if idx is None:
            self._lines.append(
                LineItem(
                    menu_item_id=menu_item.item_id,
                    name=menu_item.name,
                    unit_price=to_decimal(menu_item.price),
                    quantity=quantity,
                )
            )
        else:
            line = self._lines[idx]
            self._lines[idx] = replace(line, quantity=line.quantity + quantity)

        logger.debug("invoice_add id=%s item=%s qty=%s", self._invoice_id, menu_item.item_id, quantity)
        self._recompute()
        assert self._snapshot is not None
        return self._snapshot

    def remove_item(self, menu_item_id: int) -> None:
        idx = self._index_of(menu_item_id)
        if idx is None:
            return

        del self._lines[idx]
        logger.debug("invoice_remove id=%s item=%s", self._invoice_id, menu_item_id)
        if not self._lines:
            self.clear()
            return
        self._recompute()

    def update_quantity(self, menu_item_id: int, new_quantity: int) -> None:
        """Set a line's quantity; zero or less drops the line."""
        _check_whole(new_quantity)
        if new_quantity <= 0:
            self.remove_item(menu_item_id)
            return

        idx = self._index_of(menu_item_id)
        if idx is None:
            return

        self._lines[idx] = replace(self._lines[idx], quantity=new_quantity)
        logger.debug("invoice_qty id=%s item=%s qty=%s", self._invoice_id, menu_item_id, new_quantity)
        self._recompute()

    def update_note(self, menu_item_id: int, note: str) -> None:
        idx = self._index_of(menu_item_id)
        if idx is None:
            return

        self._lines[idx] = replace(self._lines[idx], note_for_kitchen=note)
        assert self._snapshot is not None
        # Notes do not affect money; swap the lines in without touching totals.
        self._snapshot = replace(self._snapshot, line_items=tuple(self._lines))

    def apply_coupon(self, code: str) -> None:
        """Apply ``code``; an unknown code removes any coupon already applied."""
        if not self._lines:
            return

        rate = to_decimal(self._resolve_coupon(code))
        if not (0 <= rate < 1):
            raise ValueError(f"coupon rate must be in [0, 1), got {rate} for {code!r}")
        if rate > 0:
            self._coupon_code = code
            self._coupon_rate = rate
        else:
            self._coupon_code = None
            self._coupon_rate = ZERO
        logger.debug("invoice_coupon id=%s code=%r rate=%s", self._invoice_id, code, rate)
        self._recompute()

    def clear(self) -> None:
        if self._invoice_id is not None:
            logger.debug("invoice_clear id=%s", self._invoice_id)
        self._invoice_id = None
        self._lines = []
        self._coupon_code = None
        self._coupon_rate = ZERO
        self._snapshot = None

    def _index_of(self, menu_item_id: int) -> int | None:
        for idx, line in enumerate(self._lines):
            if line.menu_item_id == menu_item_id:
                return idx
        return None

    def _recompute(self) -> None:
        assert self._invoice_id is not None
        subtotal = sum((line.line_total for line in self._lines), ZERO)
        discount = subtotal * self._coupon_rate
        tax = (subtotal - discount) * self.tax_rate
        self._snapshot = Invoice(
            invoice_id=self._invoice_id,
            line_items=tuple(self._lines),
            subtotal=subtotal,
            discount_amount=discount,
            tax_amount=tax,
            total=subtotal - discount + tax,
            tax_rate=self.tax_rate,
            applied_coupon_code=self._coupon_code,
        )
