"""Tables, inventory and activity feed."""
from decimal import Decimal

import pytest

from qryte.activity import ActivityFeed
from qryte.errors import InvalidTableStatus, UnknownInventoryItem, UnknownTable
from qryte.models import InventoryUpdate, TableStatus


class TestTableBoard:
    def test_seeded_tables(self, tables):
        assert [t.number for t in tables.list_tables()] == [1, 2, 3, 4, 5, 6]
        assert tables.get(4).status is TableStatus.NEEDS_CLEANING
        assert tables.get(1).name == "Table 1"

    def test_occupy_release_clean_cycle(self, tables):
        assert tables.occupy(1).status is TableStatus.OCCUPIED
        assert tables.release(1).status is TableStatus.NEEDS_CLEANING
        assert tables.mark_clean(1).status is TableStatus.AVAILABLE

    def test_set_status_from_string(self, tables):
        assert tables.set_status(3, "occupied").status is TableStatus.OCCUPIED

    def test_bad_status_string(self, tables):
        with pytest.raises(InvalidTableStatus):
            tables.set_status(3, "on_fire")

    def test_unknown_table(self, tables):
        with pytest.raises(UnknownTable):
            tables.occupy(99)
        assert 99 not in tables

    def test_available_tables(self, tables):
        assert [t.number for t in tables.available_tables()] == [1, 3, 5]


class TestInventory:
    def test_deduct_uses_recipe(self, inventory):
        assert inventory.deduct_for_menu_item(1, 2) is True

        assert inventory.get("1").quantity == Decimal("49.70")
        assert inventory.get("2").quantity == Decimal("24.8")
        assert inventory.get("4").quantity == Decimal("49.90")
        assert inventory.get("1").last_updated is not None

    def test_no_recipe_returns_false(self, inventory):
        before = [item.quantity for item in inventory.list_items()]
        assert inventory.deduct_for_menu_item(8, 1) is False
        assert [item.quantity for item in inventory.list_items()] == before

    def test_low_stock(self, inventory, caplog):
        assert inventory.low_stock() == []
        inventory.deduct_for_menu_item(2, 100)
        assert [item.item_id for item in inventory.low_stock()] == ["2"]
        assert inventory.get("2").quantity == Decimal("5.0")
        assert "inventory_low" in caplog.text

    def test_update_item(self, inventory):
        updated = inventory.update_item("5", InventoryUpdate(quantity=Decimal("12"), supplier="New Dairy"))
        assert updated.quantity == Decimal("12")
        assert updated.supplier == "New Dairy"
        assert updated.name == "Paneer"

    def test_add_item(self, inventory):
        item = inventory.add_item("Cumin", "Spices", Decimal("2"), "kg", Decimal("0.5"), Decimal("300"))
        assert inventory.get(item.item_id).name == "Cumin"

    def test_unknown_item(self, inventory):
        with pytest.raises(UnknownInventoryItem):
            inventory.get("zzz")


class TestActivityFeed:
    def test_newest_first(self, activity):
        activity.add("first", "order")
        activity.add("second", "bill")
        assert [e.message for e in activity.events()] == ["second", "first"]

    def test_capped(self):
        feed = ActivityFeed(limit=3)
        for i in range(5):
            feed.add(f"event {i}", "system")
        assert len(feed) == 3
        assert [e.message for e in feed.events()] == ["event 4", "event 3", "event 2"]

    def test_rejects_unknown_kind(self, activity):
        with pytest.raises(ValueError):
            activity.add("x", "party")
