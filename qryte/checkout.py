"""Hand-off of a finished invoice to order history and the floor."""

from __future__ import annotations

import logging
from pathlib import Path

from qryte.activity import ActivityFeed
from qryte.errors import NoActiveInvoice
from qryte.inventory import Inventory
from qryte.invoice import InvoiceAggregator
from qryte.money import format_money
from qryte.persistence import SavedOrder, save_order
from qryte.tables import TableBoard

logger = logging.getLogger(__name__)


class OrderDesk:
    """Submits the aggregator's invoice and applies its side effects."""

    def __init__(
        self,
        aggregator: InvoiceAggregator,
        history_path: str | Path | None = None,
        tables: TableBoard | None = None,
        inventory: Inventory | None = None,
        activity: ActivityFeed | None = None,
        source: str = "console",
    ) -> None:
        self.aggregator = aggregator
        self.history_path = history_path
        self.tables = tables
        self.inventory = inventory
        self.activity = activity
        self.source = source

    def submit(self, table_number: int | None = None) -> SavedOrder:
        invoice = self.aggregator.snapshot()
        if invoice is None:
            raise NoActiveInvoice("add items before submitting")
        if table_number is not None and self.tables is not None:
            # Raises UnknownTable before anything is written.
            self.tables.get(table_number)

        saved = save_order(invoice, table_number=table_number, source=self.source, db_path=self.history_path)

        if self.inventory is not None:
            for line in invoice.line_items:
                if self.inventory.deduct_for_menu_item(line.menu_item_id, line.quantity) and self.activity is not None:
                    self.activity.add(f"Inventory deducted for {line.name}", "order")

        if table_number is not None and self.tables is not None:
            self.tables.occupy(table_number)
            if self.activity is not None:
                self.activity.add(f"Table {table_number} marked as occupied", "bill")

        if self.activity is not None:
            self.activity.add(f"Generated invoice {invoice.invoice_id} for {format_money(invoice.total)}", "bill")

        self.aggregator.clear()
        logger.info("order_submitted order_id=%s total=%s", saved.order_id, invoice.total)
        return saved
