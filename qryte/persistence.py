"""SQLite order history for submitted invoices."""

from __future__ import annotations

import csv
import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import IO, Iterable, Iterator
from uuid import uuid4

from qryte.config import DB_PATH
from qryte.errors import InvalidStatusTransition, UnknownOrder
from qryte.models import Invoice, LineItem
from qryte.money import quantize

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("SAVED", "PRINTED", "PRINT_FAILED", "SERVED", "CANCELLED")

# Kitchen progress is tracked apart from the print/billing status above.
KITCHEN_STATUSES = ("pending", "preparing", "ready", "delivered")
KITCHEN_TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("preparing", "ready"),
    "preparing": ("ready",),
    "ready": ("delivered",),
    "delivered": (),
}
ACTIVE_KITCHEN_STATUSES = ("pending", "preparing", "ready")

CSV_HEADER = ["Order ID", "Invoice", "Table", "Items", "Subtotal", "Discount", "Tax", "Total", "Status", "Created At"]


@dataclass(frozen=True)
class SavedOrder:
    """Saved order metadata and the invoice as it was submitted."""

    order_id: str
    created_at: str
    table_number: int | None
    source: str
    status: str
    invoice: Invoice
    kitchen_status: str = "pending"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@contextmanager
def _connect(db_path: str | Path | None = None) -> Iterator[sqlite3.Connection]:
    db_file = Path(db_path or DB_PATH)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()


def bootstrap_schema(db_path: str | Path | None = None) -> None:
    """Create persistence schema if it does not already exist."""
    with _connect(db_path) as conn, conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS orders (
                id TEXT PRIMARY KEY,
                invoice_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                table_number INTEGER,
                source TEXT NOT NULL DEFAULT 'console',
                status TEXT NOT NULL,
                coupon_code TEXT,
                subtotal TEXT NOT NULL,
                discount_amount TEXT NOT NULL,
                tax_rate TEXT NOT NULL,
                tax_amount TEXT NOT NULL,
                total TEXT NOT NULL,
                kitchen_status TEXT NOT NULL DEFAULT 'pending'
            );

            CREATE TABLE IF NOT EXISTS order_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id TEXT NOT NULL,
                line_index INTEGER NOT NULL,
                menu_item_id INTEGER NOT NULL,
                item_name TEXT NOT NULL,
                unit_price TEXT NOT NULL,
                quantity INTEGER NOT NULL,
                note TEXT NOT NULL DEFAULT '',
                FOREIGN KEY(order_id) REFERENCES orders(id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_order_items_order_id_line
                ON order_items(order_id, line_index);
            """
        )
        order_columns = {row[1] for row in conn.execute("PRAGMA table_info(orders)")}
        if "kitchen_status" not in order_columns:
            conn.execute("ALTER TABLE orders ADD COLUMN kitchen_status TEXT NOT NULL DEFAULT 'pending'")


def save_order(
    invoice: Invoice | None,
    table_number: int | None = None,
    source: str = "console",
    db_path: str | Path | None = None,
) -> SavedOrder:
    """Persist a submitted invoice and return the saved order."""
    if invoice is None or not invoice.line_items:
        raise ValueError("Cannot save an empty invoice")
    if table_number is not None and table_number < 1:
        raise ValueError("table_number must be positive")

    order_id = f"ORD-{uuid4().hex[:12].upper()}"
    created_at = _utc_now_iso()

    with _connect(db_path) as conn, conn:
        conn.execute(
            """
            INSERT INTO orders (
                id, invoice_id, created_at, table_number, source, status, coupon_code,
                subtotal, discount_amount, tax_rate, tax_amount, total
            ) VALUES (?, ?, ?, ?, ?, 'SAVED', ?, ?, ?, ?, ?, ?)
            """,
            (
                order_id,
                invoice.invoice_id,
                created_at,
                table_number,
                source,
                invoice.applied_coupon_code,
                str(invoice.subtotal),
                str(invoice.discount_amount),
                str(invoice.tax_rate),
                str(invoice.tax_amount),
                str(invoice.total),
            ),
        )
        for idx, line in enumerate(invoice.line_items):
            conn.execute(
                """
                INSERT INTO order_items (order_id, line_index, menu_item_id, item_name, unit_price, quantity, note)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (order_id, idx, line.menu_item_id, line.name, str(line.unit_price), line.quantity, line.note_for_kitchen),
            )

    logger.info("order_saved order_id=%s invoice=%s table=%s", order_id, invoice.invoice_id, table_number)
    return SavedOrder(
        order_id=order_id,
        created_at=created_at,
        table_number=table_number,
        source=source,
        status="SAVED",
        invoice=invoice,
    )


def update_order_status(order_id: str, status: str, db_path: str | Path | None = None) -> None:
    """Update status for a persisted order."""
    if status not in ORDER_STATUSES:
        raise ValueError(f"unknown order status {status!r}")
    with _connect(db_path) as conn, conn:
        cur = conn.execute("UPDATE orders SET status = ? WHERE id = ?", (status, order_id))
        if cur.rowcount == 0:
            raise UnknownOrder(order_id)
    logger.debug("order_status order_id=%s status=%s", order_id, status)


def update_kitchen_status(order_id: str, status: str, db_path: str | Path | None = None) -> None:
    """
    Move an order along the kitchen queue.

    Orders go ``pending -> preparing -> ready -> delivered``; a pending order
    may also be marked ready directly.

    Raises:
        ValueError: if ``status`` is not a kitchen status.
        UnknownOrder: if no order has ``order_id``.
        InvalidStatusTransition: if the current status does not lead to ``status``.
    """
    if status not in KITCHEN_STATUSES:
        raise ValueError(f"unknown kitchen status {status!r}")
    with _connect(db_path) as conn, conn:
        row = conn.execute("SELECT kitchen_status FROM orders WHERE id = ?", (order_id,)).fetchone()
        if row is None:
            raise UnknownOrder(order_id)
        current = row[0]
        if status not in KITCHEN_TRANSITIONS[current]:
            raise InvalidStatusTransition(f"{order_id}: cannot go from {current} to {status}")
        conn.execute("UPDATE orders SET kitchen_status = ? WHERE id = ?", (status, order_id))
    logger.info("kitchen_status order_id=%s %s->%s", order_id, current, status)


def _load_lines(conn: sqlite3.Connection, order_id: str) -> tuple[LineItem, ...]:
    rows = conn.execute(
        """
        SELECT menu_item_id, item_name, unit_price, quantity, note
        FROM order_items WHERE order_id = ? ORDER BY line_index
        """,
        (order_id,),
    )
    return tuple(
        LineItem(
            menu_item_id=int(menu_item_id),
            name=name,
            unit_price=Decimal(unit_price),
            quantity=int(quantity),
            note_for_kitchen=note,
        )
        for menu_item_id, name, unit_price, quantity, note in rows
    )


_ORDER_COLUMNS = (
    "id, invoice_id, created_at, table_number, source, status, coupon_code, "
    "subtotal, discount_amount, tax_rate, tax_amount, total, kitchen_status"
)


def _row_to_order(conn: sqlite3.Connection, row: tuple) -> SavedOrder:
    (order_id, invoice_id, created_at, table_number, source, status, coupon_code,
     subtotal, discount, tax_rate, tax, total, kitchen_status) = row
    invoice = Invoice(
        invoice_id=invoice_id,
        line_items=_load_lines(conn, order_id),
        subtotal=Decimal(subtotal),
        discount_amount=Decimal(discount),
        tax_amount=Decimal(tax),
        total=Decimal(total),
        tax_rate=Decimal(tax_rate),
        applied_coupon_code=coupon_code,
    )
    return SavedOrder(
        order_id=order_id,
        created_at=created_at,
        table_number=table_number,
        source=source,
        status=status,
        invoice=invoice,
        kitchen_status=kitchen_status,
    )


def get_order(order_id: str, db_path: str | Path | None = None) -> SavedOrder | None:
    with _connect(db_path) as conn:
        row = conn.execute(f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = ?", (order_id,)).fetchone()
        if row is None:
            return None
        return _row_to_order(conn, row)


def list_orders(
    status: str | None = None,
    table_number: int | None = None,
    created_on: date | None = None,
    kitchen_status: str | None = None,
    db_path: str | Path | None = None,
) -> list[SavedOrder]:
    """
    Saved orders, newest first.

    Every filter that is given must match. ``created_on`` is compared with
    the UTC date of ``created_at``.
    """
    clauses: list[str] = []
    params: list[object] = []
    if status is not None:
        clauses.append("status = ?")
        params.append(status)
    if table_number is not None:
        clauses.append("table_number = ?")
        params.append(table_number)
    if created_on is not None:
        clauses.append("substr(created_at, 1, 10) = ?")
        params.append(created_on.isoformat())
    if kitchen_status is not None:
        clauses.append("kitchen_status = ?")
        params.append(kitchen_status)

    query = f"SELECT {_ORDER_COLUMNS} FROM orders"
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    query += " ORDER BY created_at DESC, rowid DESC"

    with _connect(db_path) as conn:
        return [_row_to_order(conn, row) for row in conn.execute(query, params).fetchall()]


def list_kitchen_orders(db_path: str | Path | None = None) -> list[SavedOrder]:
    """Orders the kitchen still has to finish or hand over, oldest first. Cancelled orders are left out."""
    placeholders = ", ".join("?" for _ in ACTIVE_KITCHEN_STATUSES)
    query = (
        f"SELECT {_ORDER_COLUMNS} FROM orders "
        f"WHERE kitchen_status IN ({placeholders}) AND status != 'CANCELLED' "
        "ORDER BY created_at ASC, rowid ASC"
    )
    with _connect(db_path) as conn:
        return [_row_to_order(conn, row) for row in conn.execute(query, ACTIVE_KITCHEN_STATUSES).fetchall()]


def export_orders_csv(orders: Iterable[SavedOrder], fh: IO[str]) -> int:
    """Write order history as CSV and return the number of rows written."""
    writer = csv.writer(fh)
    writer.writerow(CSV_HEADER)
    count = 0
    for order in orders:
        inv = order.invoice
        items = "; ".join(f"{line.name} x{line.quantity}" for line in inv.line_items)
        writer.writerow(
            [
                order.order_id,
                inv.invoice_id,
                order.table_number if order.table_number is not None else "",
                items,
                f"{quantize(inv.subtotal):.2f}",
                f"{quantize(inv.discount_amount):.2f}",
                f"{quantize(inv.tax_amount):.2f}",
                f"{quantize(inv.total):.2f}",
                order.status,
                order.created_at,
            ]
        )
        count += 1
    return count
