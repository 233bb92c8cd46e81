"""Domain models for qryte-order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class MenuItem:
    """A catalog item that can be added to an invoice."""

    item_id: int
    name: str
    category: str
    price: Decimal
    description: str = ""
    is_veg: bool = True
    prep_time_minutes: int = 0
    active: bool = True


@dataclass(frozen=True)
class NewMenuItem:
    """Fields required to register a new catalog item."""

    name: str
    category: str
    price: Decimal
    description: str = ""
    is_veg: bool = True
    prep_time_minutes: int = 15
    active: bool = True


@dataclass(frozen=True)
class MenuItemUpdate:
    """Partial catalog update. ``None`` leaves a field unchanged."""

    name: str | None = None
    category: str | None = None
    price: Decimal | None = None
    description: str | None = None
    is_veg: bool | None = None
    prep_time_minutes: int | None = None
    active: bool | None = None


@dataclass(frozen=True)
class LineItem:
    """One menu item with quantity and kitchen note inside an invoice."""

    menu_item_id: int
    name: str
    unit_price: Decimal
    quantity: int
    note_for_kitchen: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Invoice:
    """Read-only view of the order in progress."""

    invoice_id: str
    line_items: tuple[LineItem, ...]
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal
    tax_rate: Decimal
    applied_coupon_code: str | None = None

    def line_for(self, menu_item_id: int) -> LineItem | None:
        for line in self.line_items:
            if line.menu_item_id == menu_item_id:
                return line
        return None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.line_items)


@dataclass(frozen=True)
class ActivityEvent:
    """A recent-activity entry shown to staff."""

    event_id: str
    message: str
    timestamp: datetime
    kind: str


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    NEEDS_CLEANING = "needs_cleaning"


@dataclass(frozen=True)
class Table:
    """A dine-in table."""

    table_id: int
    number: int
    name: str
    capacity: int
    status: TableStatus = TableStatus.AVAILABLE


@dataclass(frozen=True)
class InventoryItem:
    """A stocked ingredient."""

    item_id: str
    name: str
    category: str
    quantity: Decimal
    unit: str
    min_threshold: Decimal
    unit_price: Decimal
    supplier: str | None = None
    last_updated: datetime | None = None


@dataclass(frozen=True)
class InventoryUpdate:
    """Partial inventory update. ``None`` leaves a field unchanged."""

    name: str | None = None
    category: str | None = None
    quantity: Decimal | None = None
    unit: str | None = None
    min_threshold: Decimal | None = None
    unit_price: Decimal | None = None
    supplier: str | None = None


@dataclass(frozen=True)
class RecipeIngredient:
    """Amount of one inventory item consumed by one portion of a dish."""

    inventory_item_id: str
    quantity_needed: Decimal
