import sqlite3

import pytest

from qryte.checkout import OrderDesk
from qryte.coupon_modal import CouponModal
from qryte.notes_modal import NotesModal
from qryte.order_app import OrderApp
from qryte.persistence import list_orders
from qryte.table_number_modal import TableNumberModal


class JammedPrinter:
    """Stands in for an escpos printer whose paper path is blocked."""

    def image(self, img):
        raise OSError("paper jam")

    def cut(self):
        pass


@pytest.fixture
def desk(aggregator, tables, db_path):
    return OrderDesk(aggregator, history_path=db_path, tables=tables)


@pytest.fixture
def app(catalog, desk):
    return OrderApp(catalog, desk, print_tickets=False)


@pytest.mark.asyncio
async def test_search_and_add(app):
    async with app.run_test() as pilot:
        await pilot.press("s", "b", "i", "r")
        assert app.input_state == "active"
        assert [item.name for item in app._filtered_results()] == ["Biryani"]

        await pilot.press("enter", "enter")
        invoice = app.aggregator.snapshot()
        assert invoice.line_items[0].name == "Biryani"
        assert invoice.line_items[0].quantity == 2


@pytest.mark.asyncio
async def test_quantity_delete_and_submit(app, catalog, db_path, tables):
    async with app.run_test() as pilot:
        app.add_menu_item(catalog.get(1))
        app.add_menu_item(catalog.get(4), 3)
        await pilot.pause()

        app.action_change_quantity(-1)
        assert app.aggregator.snapshot().line_for(4).quantity == 2

        await pilot.press("k")
        app.action_change_quantity(-1)
        assert app.aggregator.snapshot().line_for(1) is None

        app.submit_order(5)
        await pilot.pause()

        assert app.aggregator.snapshot() is None
        assert app.system_status.startswith("Saved: ORD-")
        assert [o.table_number for o in list_orders(db_path=db_path)] == [5]
        assert tables.get(5).status.value == "occupied"


@pytest.mark.asyncio
async def test_submit_without_items_sets_status(app):
    async with app.run_test():
        app.action_submit()
        assert app.system_status == "Please add items to the order"


class TestTablePrompt:
    @pytest.mark.asyncio
    async def test_zero_submits_as_takeaway(self, app, catalog, db_path):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(4))
            await pilot.press("ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, TableNumberModal)

            await pilot.press("0", "enter")
            await pilot.pause()

            assert not isinstance(app.screen, TableNumberModal)
            assert app.aggregator.snapshot() is None
        assert [o.table_number for o in list_orders(db_path=db_path)] == [None]

    @pytest.mark.asyncio
    async def test_known_table_submits(self, app, catalog, db_path, tables):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            await pilot.press("ctrl+s")
            await pilot.pause()
            await pilot.press("3", "enter")
            await pilot.pause()

        assert [o.table_number for o in list_orders(db_path=db_path)] == [3]
        assert tables.get(3).status.value == "occupied"

    @pytest.mark.asyncio
    async def test_unknown_table_keeps_prompt_open(self, app, catalog, db_path):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            await pilot.press("ctrl+s")
            await pilot.pause()
            await pilot.press("9", "9", "enter")
            await pilot.pause()

            assert isinstance(app.screen, TableNumberModal)
            assert app.screen.error_message == "No table 99."
            assert app.aggregator.is_active
        assert list_orders(db_path=db_path) == []


class TestCouponPrompt:
    @pytest.mark.asyncio
    async def test_apply_then_remove(self, app, catalog):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            await pilot.press("c")
            await pilot.pause()
            assert isinstance(app.screen, CouponModal)

            await pilot.press("s", "a", "v", "e", "1", "0", "enter")
            await pilot.pause()
            assert app.aggregator.snapshot().applied_coupon_code == "SAVE10"
            assert app.system_status == "Coupon SAVE10 applied"

            await pilot.press("c")
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()
            assert app.aggregator.snapshot().applied_coupon_code is None
            assert app.system_status == "Coupon removed"

    @pytest.mark.asyncio
    async def test_unknown_code_reported(self, app, catalog):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            await pilot.press("c")
            await pilot.pause()
            await pilot.press("b", "o", "g", "u", "s", "enter")
            await pilot.pause()

            invoice = app.aggregator.snapshot()
            assert invoice.applied_coupon_code is None
            assert invoice.discount_amount == 0
            assert app.system_status == "Unknown coupon BOGUS"


class TestNotesPrompt:
    @pytest.mark.asyncio
    async def test_preset_toggle_saved_on_close(self, app, catalog):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.screen, NotesModal)

            await pilot.press("enter", "escape")
            await pilot.pause()

            assert not isinstance(app.screen, NotesModal)
            assert app.aggregator.snapshot().line_for(1).note_for_kitchen == "Less Spicy"

    @pytest.mark.asyncio
    async def test_free_text_note(self, app, catalog):
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            await pilot.press("n")
            await pilot.pause()

            # Wrap from the first row to "Other note".
            await pilot.press("k", "enter")
            await pilot.pause()
            assert app.screen.editing_other

            await pilot.press("n", "o", "space", "s", "a", "l", "t", "enter")
            await pilot.pause()
            assert not app.screen.editing_other
            await pilot.press("escape")
            await pilot.pause()

            assert app.aggregator.snapshot().line_for(1).note_for_kitchen == "no salt"
            assert app.aggregator.snapshot().total == 280


class TestSubmitFailures:
    @pytest.mark.asyncio
    async def test_print_failure_marks_order(self, catalog, desk, db_path):
        app = OrderApp(catalog, desk, print_tickets=True, printer=JammedPrinter())
        async with app.run_test() as pilot:
            app.printer_ready = True
            app.add_menu_item(catalog.get(1))
            app.submit_order(2)
            await pilot.pause()

            assert "print failed" in app.system_status
            assert app.aggregator.snapshot() is None

        [order] = list_orders(db_path=db_path)
        assert order.status == "PRINT_FAILED"

    @pytest.mark.asyncio
    async def test_save_error_keeps_invoice(self, app, catalog, db_path, monkeypatch):
        def locked(*args, **kwargs):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr("qryte.checkout.save_order", locked)
        async with app.run_test() as pilot:
            app.add_menu_item(catalog.get(1))
            app.submit_order(2)
            await pilot.pause()

            assert app.system_status == "Could not save order: database is locked"
            assert app.aggregator.snapshot().line_for(1).quantity == 1
