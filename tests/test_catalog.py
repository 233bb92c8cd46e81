from decimal import Decimal

import pytest

from qryte.catalog import Catalog, InMemoryCatalog
from qryte.errors import UnknownMenuItem
from qryte.models import MenuItem, MenuItemUpdate, NewMenuItem


class TestCatalogRead:
    def test_default_catalog_has_sample_menu(self, catalog):
        items = catalog.list_items()
        assert len(items) == 10
        assert catalog.get(1).name == "Biryani"
        assert catalog.get(1).price == Decimal("250")

    def test_satisfies_catalog_protocol(self, catalog):
        assert isinstance(catalog, Catalog)

    def test_get_unknown_raises(self, catalog):
        with pytest.raises(UnknownMenuItem):
            catalog.get(404)
        assert catalog.find(404) is None

    def test_categories_in_first_seen_order(self, catalog):
        assert catalog.categories() == ["Mains", "Breads", "Appetizers", "Desserts", "Beverages"]

    def test_duplicate_ids_rejected(self):
        item = MenuItem(item_id=1, name="A", category="Mains", price=Decimal("1"))
        with pytest.raises(ValueError):
            InMemoryCatalog([item, item])


class TestCatalogSearch:
    def test_matches_name_case_insensitive(self, catalog):
        assert [item.name for item in catalog.search("CHICKEN")] == ["Butter Chicken", "Tandoori Chicken"]

    def test_matches_alias(self, catalog):
        assert [item.item_id for item in catalog.search("briyani")] == [1]

    def test_empty_query_lists_all_active(self, catalog):
        assert len(catalog.search("")) == 10

    def test_category_filter(self, catalog):
        assert {item.category for item in catalog.search("", category="Appetizers")} == {"Appetizers"}

    def test_inactive_items_hidden(self, catalog):
        catalog.set_active(1, False)
        assert 1 not in [item.item_id for item in catalog.search("")]
        assert len(catalog.list_items()) == 9
        assert len(catalog.list_items(include_inactive=True)) == 10


class TestCatalogWrite:
    def test_add_assigns_next_id(self, catalog):
        item = catalog.add_item(NewMenuItem(name="Masala Dosa", category="Mains", price=Decimal("150")))
        assert item.item_id == 11
        assert catalog.get(11) == item
        assert item.prep_time_minutes == 15

    def test_add_rejects_negative_price(self, catalog):
        with pytest.raises(ValueError):
            catalog.add_item(NewMenuItem(name="X", category="Mains", price=Decimal("-1")))

    def test_update_only_given_fields(self, catalog):
        updated = catalog.update_item(2, MenuItemUpdate(price=Decimal("340")))
        assert updated.price == Decimal("340")
        assert updated.name == "Butter Chicken"
        assert updated.category == "Mains"

    def test_update_can_set_false_flags(self, catalog):
        assert catalog.update_item(3, MenuItemUpdate(is_veg=False, active=False)).is_veg is False
        assert catalog.get(3).active is False

    def test_update_unknown_raises(self, catalog):
        with pytest.raises(UnknownMenuItem):
            catalog.update_item(404, MenuItemUpdate(name="x"))

    def test_delete(self, catalog):
        catalog.delete_item(10)
        assert catalog.find(10) is None
        with pytest.raises(UnknownMenuItem):
            catalog.delete_item(10)

    def test_price_change_does_not_touch_open_invoice(self, catalog, aggregator):
        aggregator.add_item(catalog.get(1))
        catalog.update_item(1, MenuItemUpdate(price=Decimal("400")))
        aggregator.add_item(catalog.get(1))

        invoice = aggregator.snapshot()
        assert invoice.line_items[0].unit_price == Decimal("250")
        assert invoice.subtotal == Decimal("500")
