"""Money formatting, kitchen notes, rich rendering and ticket lines."""
from decimal import Decimal

import pytest
from escpos.printer import Dummy
from PIL import ImageFont

from qryte.data import compose_kitchen_note, note_presets_for_category, split_kitchen_note
from qryte.money import format_money, format_rate, quantize, to_decimal
from qryte.printer import print_invoice, ticket_lines
from qryte.rendering import format_line_item, format_note_tags, format_totals


class TestMoney:
    def test_to_decimal_from_float_uses_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["abc", True, None, float("nan")])
    def test_to_decimal_rejects(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_quantize_half_even(self):
        assert quantize(Decimal("0.125")) == Decimal("0.12")
        assert quantize(Decimal("0.135")) == Decimal("0.14")

    def test_format_money(self):
        assert format_money(Decimal("1234.5")) == "₹1,234.50"
        assert format_money(Decimal("54"), symbol="") == "54.00"

    def test_format_rate(self):
        assert format_rate(Decimal("0.12")) == "12%"
        assert format_rate(Decimal("0.125")) == "12.5%"


class TestKitchenNotes:
    def test_presets_for_category(self):
        assert note_presets_for_category("Beverages") == ["no_ice", "less_sugar"]
        assert note_presets_for_category("Unknown") == []

    def test_compose_uses_preset_order(self):
        assert compose_kitchen_note({"no_onions", "less_spicy"}, ["Extra lemon"]) == "Less Spicy, No Onions, Extra lemon"

    def test_split_inverts_compose(self):
        presets, custom = split_kitchen_note("Less Spicy, no onions, Extra lemon")
        assert presets == {"less_spicy", "no_onions"}
        assert custom == ["Extra lemon"]

    def test_split_empty(self):
        assert split_kitchen_note("") == (set(), [])


class TestRendering:
    def test_line_item(self, aggregator, biryani):
        invoice = aggregator.add_item(biryani, 2)
        assert format_line_item(invoice.line_items[0]).plain == "2 x Biryani  ₹500.00"

    def test_note_tags(self):
        assert format_note_tags("Less Spicy, No Onions").plain == "[Less Spicy] [No Onions]"

    def test_totals_with_coupon(self, aggregator, biryani):
        aggregator.add_item(biryani, 2)
        aggregator.apply_coupon("SAVE10")
        plain = format_totals(aggregator.snapshot()).plain
        assert plain.splitlines() == [
            "Subtotal: ₹500.00",
            "Discount (SAVE10): -₹50.00",
            "GST (12%): ₹54.00",
            "Total: ₹504.00",
        ]

    def test_totals_without_coupon(self, aggregator, naan):
        aggregator.add_item(naan)
        assert "Discount" not in format_totals(aggregator.snapshot()).plain


class TestTicketLines:
    def test_lines(self, aggregator, biryani, naan):
        aggregator.add_item(biryani, 2)
        aggregator.add_item(naan)
        aggregator.update_note(biryani.item_id, "Less Spicy")
        aggregator.apply_coupon("SAVE10")

        assert ticket_lines(aggregator.snapshot(), table_number=4) == [
            "T4  INV-TEST-1",
            "2 x Biryani  500.00",
            "    Less Spicy",
            "1 x Garlic Naan  60.00",
            "Subtotal  560.00",
            "SAVE10  -56.00",
            "GST 12%  60.48",
            "TOTAL  564.48",
        ]

    def test_takeaway_header(self, aggregator, naan):
        aggregator.add_item(naan)
        assert ticket_lines(aggregator.snapshot())[0] == "INV-TEST-1"


class TestPrintInvoice:
    def test_prints_one_image_per_line_then_cuts(self, aggregator, biryani):
        aggregator.add_item(biryani)
        printer = Dummy()
        print_invoice(aggregator.snapshot(), table_number=2, printer=printer, font=ImageFont.load_default())

        assert printer.output


class TestConfigureLogging:
    def test_writes_module_logs_to_file(self, tmp_path, aggregator, biryani):
        import logging

        from qryte.logs import configure_logging

        log_file = tmp_path / "logs" / "debug.log"
        qryte_logger = logging.getLogger("qryte")
        previous_level = qryte_logger.level
        handler = configure_logging(log_file)
        try:
            aggregator.add_item(biryani)
            handler.flush()
        finally:
            qryte_logger.removeHandler(handler)
            qryte_logger.setLevel(previous_level)
            handler.close()

        content = log_file.read_text(encoding="utf-8")
        assert "qryte.invoice invoice_open id=INV-TEST-1" in content

    def test_unwritable_path_returns_none(self, tmp_path):
        from qryte.logs import configure_logging

        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert configure_logging(blocker / "debug.log") is None
