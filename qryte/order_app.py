"""Main Textual app class."""

from __future__ import annotations

import logging
import sqlite3

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from qryte.catalog import InMemoryCatalog
from qryte.checkout import OrderDesk
from qryte.coupon_modal import CouponModal
from qryte.errors import UnknownTable
from qryte.invoice import InvoiceAggregator
from qryte.models import Invoice, LineItem, MenuItem
from qryte.notes_modal import NotesModal
from qryte.persistence import bootstrap_schema, update_order_status
from qryte.printer import check_printer_dependencies, print_invoice
from qryte.rendering import format_line_item, format_menu_item, format_note_tags, format_totals
from qryte.table_number_modal import TAKEAWAY, TableNumberModal

logger = logging.getLogger(__name__)


class OrderApp(App):
    """A Textual app for building an invoice from the menu and submitting it."""

    TITLE = "Qryte Orders"
    SUB_TITLE = "Order taking"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #invoice-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #search-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #lines-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #totals {
        height: auto;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_query = reactive("")
    selected_index = reactive(0)
    line_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "add_selected", "Add item"),
        ("backspace", "backspace_query", "Delete query char"),
        ("plus", "change_quantity(1)", "Qty +1"),
        ("minus", "change_quantity(-1)", "Qty -1"),
        Binding("ctrl+s", "submit", "Submit", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        catalog: InMemoryCatalog,
        desk: OrderDesk,
        print_tickets: bool = True,
        printer: object | None = None,
    ) -> None:
        super().__init__()
        self.catalog = catalog
        self.desk = desk
        self.print_tickets = print_tickets
        self.printer = printer
        self.printer_ready = False
        self.system_status = ""

    @property
    def aggregator(self) -> InvoiceAggregator:
        return self.desk.aggregator

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="invoice-pane"):
                yield Static("Invoice", classes="pane-title")
                yield Static("(no items yet)", id="lines-list")
                yield Static(id="totals")
            with Vertical(id="search-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")

    def on_mount(self) -> None:
        bootstrap_schema(self.desk.history_path)
        if self.print_tickets:
            self.printer_ready, msg = check_printer_dependencies()
        else:
            msg = "Printing disabled"
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return
        if not (event.character.isalnum() or event.character == " "):
            return

        if self.input_state == "active":
            self.search_query += event.character
            self.selected_index = 0
            self._refresh_search()
            event.stop()
            return

        handlers = {
            "s": self._start_search,
            "j": lambda: self._move_line_selection(1),
            "k": lambda: self._move_line_selection(-1),
            "d": self._delete_selected_line,
            "n": self._open_notes_for_selected_line,
            "c": self._open_coupon_prompt,
            "x": self._clear_invoice,
        }
        handler = handlers.get(event.character.lower())
        if handler is None:
            return
        handler()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen) or self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_add_selected(self) -> None:
        if isinstance(self.screen, ModalScreen) or self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            return

        item = results[min(self.selected_index, len(results) - 1)]
        self.add_menu_item(item)

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, ModalScreen) or self.input_state != "active":
            return
        if not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_change_quantity(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen) or self.input_state != "normal":
            return
        line = self._selected_line()
        if line is None:
            return
        self.aggregator.update_quantity(line.menu_item_id, line.quantity + delta)
        self._refresh_lines()

    def action_submit(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "normal":
            self._set_status("Submit only in NORMAL mode (Ctrl+C to exit search)")
            return
        if not self.aggregator.is_active:
            self._set_status("Please add items to the order")
            return

        valid = {table.number for table in self.desk.tables.list_tables()} if self.desk.tables else set()
        self.push_screen(TableNumberModal(valid), callback=self._submit_for_table)

    def add_menu_item(self, item: MenuItem, quantity: int = 1) -> None:
        invoice = self.aggregator.add_item(item, quantity)
        self.line_selected_index = next(
            idx for idx, line in enumerate(invoice.line_items) if line.menu_item_id == item.item_id
        )
        self._refresh_lines()

    def submit_order(self, table_number: int | None) -> None:
        """Save the invoice, print it when a printer is ready, and reset the screen."""
        invoice = self.aggregator.snapshot()
        try:
            saved = self.desk.submit(table_number)
        except UnknownTable:
            self._set_status(f"No table {table_number}")
            return
        except sqlite3.Error as exc:
            logger.error("save_failed table=%s error=%r", table_number, exc)
            self._set_status(f"Could not save order: {exc}")
            return

        if self.print_tickets and self.printer_ready and invoice is not None:
            try:
                print_invoice(invoice, table_number, printer=self.printer)
            except Exception as exc:
                update_order_status(saved.order_id, "PRINT_FAILED", db_path=self.desk.history_path)
                logger.warning("print_failed order_id=%s error=%r", saved.order_id, exc)
                self.system_status = f"Saved {saved.order_id} but print failed: {exc}"
            else:
                update_order_status(saved.order_id, "PRINTED", db_path=self.desk.history_path)
                self.system_status = f"Saved + printed: {saved.order_id}"
        else:
            self.system_status = f"Saved: {saved.order_id}"

        self.line_selected_index = None
        self._refresh_all()

    def _submit_for_table(self, result: int | None) -> None:
        if result is None:
            self._set_status("Submit cancelled")
            return
        self.submit_order(None if result == TAKEAWAY else result)

    def _start_search(self) -> None:
        self.input_state = "active"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()

    def _filtered_results(self) -> list[MenuItem]:
        return self.catalog.search(self.search_query)

    def _refresh_all(self) -> None:
        self._refresh_lines()
        self._refresh_search()

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_search()

    def _lines(self) -> tuple[LineItem, ...]:
        invoice = self.aggregator.snapshot()
        return invoice.line_items if invoice is not None else ()

    def _move_line_selection(self, delta: int) -> None:
        lines = self._lines()
        if not lines:
            return

        if self.line_selected_index is None:
            self.line_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.line_selected_index = (self.line_selected_index + delta) % len(lines)
        self._refresh_lines()

    def _selected_line(self) -> LineItem | None:
        lines = self._lines()
        if self.line_selected_index is None:
            return None
        if not (0 <= self.line_selected_index < len(lines)):
            return None
        return lines[self.line_selected_index]

    def _delete_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        self.aggregator.remove_item(line.menu_item_id)
        self._refresh_lines()

    def _clear_invoice(self) -> None:
        if not self.aggregator.is_active:
            return
        self.aggregator.clear()
        self.line_selected_index = None
        self._set_status("Order cleared")
        self._refresh_lines()

    def _open_notes_for_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        item = self.catalog.find(line.menu_item_id)
        category = item.category if item is not None else ""

        def save_note(note: str) -> None:
            self.aggregator.update_note(line.menu_item_id, note)
            self._refresh_lines()

        self.push_screen(NotesModal(line, category), callback=save_note)

    def _open_coupon_prompt(self) -> None:
        invoice = self.aggregator.snapshot()
        if invoice is None:
            self._set_status("Please add items to the order")
            return
        self.push_screen(CouponModal(invoice.applied_coupon_code), callback=self._apply_coupon)

    def _apply_coupon(self, code: str | None) -> None:
        if code is None:
            return
        self.aggregator.apply_coupon(code)
        invoice = self.aggregator.snapshot()
        if code and (invoice is None or invoice.applied_coupon_code != code):
            self.system_status = f"Unknown coupon {code}"
        elif code:
            self.system_status = f"Coupon {code} applied"
        else:
            self.system_status = "Coupon removed"
        self._refresh_all()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_lines(self) -> None:
        try:
            lines_widget = self.query_one("#lines-list", Static)
            totals_widget = self.query_one("#totals", Static)
        except NoMatches:
            return

        invoice = self.aggregator.snapshot()
        if invoice is None:
            self.line_selected_index = None
            lines_widget.update("(no items yet)")
            totals_widget.update("")
            return

        lines = invoice.line_items
        if self.line_selected_index is not None and self.line_selected_index >= len(lines):
            self.line_selected_index = len(lines) - 1

        start, end = self._window_bounds(len(lines), self._visible_rows(lines_widget), self.line_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.line_selected_index else "  "
            text.append(pointer)
            text.append_text(format_line_item(lines[idx]))
            if lines[idx].note_for_kitchen:
                text.append("\n      ")
                text.append_text(format_note_tags(lines[idx].note_for_kitchen))

        if end < len(lines):
            text.append("\n⋮", style="dim")

        lines_widget.update(text)
        totals_widget.update(self._totals_text(invoice))

    def _totals_text(self, invoice: Invoice) -> Text:
        text = Text(f"{invoice.invoice_id}\n", style="dim")
        text.append_text(format_totals(invoice))
        return text

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            bar.update(
                "S search, J/K select, +/- qty, N note, D delete, C coupon, X clear, Ctrl+S submit.\n" + status
            )
            return

        bar.update(Text(f"Search: {self.search_query}"))

    def _refresh_results(self, results: list[MenuItem]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update("")
            return

        if not results:
            results_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        start, end = self._window_bounds(len(results), self._visible_rows(results_widget), self.selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            text.append("➤ " if idx == self.selected_index else "  ")
            text.append_text(format_menu_item(results[idx]))

        if end < len(results):
            text.append("\n⋮", style="dim")

        results_widget.update(text)
