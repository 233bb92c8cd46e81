"""Entry point for the qryte-order Textual app."""

from __future__ import annotations

import argparse

from qryte.activity import ActivityFeed
from qryte.catalog import default_catalog
from qryte.checkout import OrderDesk
from qryte.config import DB_PATH
from qryte.inventory import default_inventory
from qryte.invoice import InvoiceAggregator
from qryte.logs import configure_logging
from qryte.order_app import OrderApp
from qryte.tables import default_table_board


def build_app(db_path: str = DB_PATH, print_tickets: bool = True) -> OrderApp:
    """Wire the sample catalog, floor and history store into the console."""
    desk = OrderDesk(
        InvoiceAggregator(),
        history_path=db_path,
        tables=default_table_board(),
        inventory=default_inventory(),
        activity=ActivityFeed(),
    )
    return OrderApp(default_catalog(), desk, print_tickets=print_tickets)


def main() -> None:
    """Run the Textual application."""
    parser = argparse.ArgumentParser(description="Restaurant order console")
    parser.add_argument("--db", default=DB_PATH, help="SQLite order history path")
    parser.add_argument("--no-print", action="store_true", help="skip ticket printing")
    args = parser.parse_args()

    configure_logging()
    build_app(args.db, print_tickets=not args.no_print).run()


if __name__ == "__main__":
    main()
