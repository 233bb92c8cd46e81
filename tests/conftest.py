"""Shared fixtures for qryte-order tests."""

from decimal import Decimal
from itertools import count

import pytest

from qryte.activity import ActivityFeed
from qryte.catalog import default_catalog
from qryte.inventory import default_inventory
from qryte.invoice import InvoiceAggregator
from qryte.models import MenuItem
from qryte.tables import default_table_board


@pytest.fixture
def biryani():
    return MenuItem(item_id=1, name="Biryani", category="Mains", price=Decimal("250"), is_veg=False, prep_time_minutes=20)


@pytest.fixture
def naan():
    return MenuItem(item_id=4, name="Garlic Naan", category="Breads", price=Decimal("60"), prep_time_minutes=5)


@pytest.fixture
def lassi():
    return MenuItem(item_id=8, name="Mango Lassi", category="Beverages", price=Decimal("120.10"), prep_time_minutes=3)


@pytest.fixture
def aggregator():
    ids = count(1)
    return InvoiceAggregator(tax_rate=Decimal("0.12"), id_factory=lambda: f"INV-TEST-{next(ids)}")


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def tables():
    return default_table_board()


@pytest.fixture
def inventory():
    return default_inventory()


@pytest.fixture
def activity():
    return ActivityFeed()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "history.db"
