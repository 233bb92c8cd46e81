"""Menu catalog repository."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Protocol, runtime_checkable

from qryte.data import aliases_for_item, seed_menu_items
from qryte.errors import UnknownMenuItem
from qryte.models import MenuItem, MenuItemUpdate, NewMenuItem
from qryte.money import to_decimal

logger = logging.getLogger(__name__)


@runtime_checkable
class Catalog(Protocol):
    """Read side of the menu used by the order flow."""

    def get(self, item_id: int) -> MenuItem: ...

    def list_items(self, include_inactive: bool = False) -> list[MenuItem]: ...


class InMemoryCatalog:
    """Catalog kept in process memory, seeded by the caller."""

    def __init__(self, items: Iterable[MenuItem] = (), aliases: dict[int, list[str]] | None = None) -> None:
        self._items: dict[int, MenuItem] = {}
        for item in items:
            if item.item_id in self._items:
                raise ValueError(f"duplicate menu item id {item.item_id}")
            self._items[item.item_id] = item
        self._aliases: dict[int, list[str]] = dict(aliases or {})

    def get(self, item_id: int) -> MenuItem:
        item = self._items.get(item_id)
        if item is None:
            raise UnknownMenuItem(item_id)
        return item

    def find(self, item_id: int) -> MenuItem | None:
        return self._items.get(item_id)

    def list_items(self, include_inactive: bool = False) -> list[MenuItem]:
        return [item for item in self._items.values() if include_inactive or item.active]

    def categories(self) -> list[str]:
        seen: list[str] = []
        for item in self._items.values():
            if item.category not in seen:
                seen.append(item.category)
        return seen

    def search(self, query: str, category: str | None = None) -> list[MenuItem]:
        """Case-insensitive match on name or alias among active items."""
        q = query.strip().lower()
        results: list[MenuItem] = []
        for item in self.list_items():
            if category is not None and item.category != category:
                continue
            if not q:
                results.append(item)
                continue
            if q in item.name.lower() or any(q in alias.lower() for alias in self._aliases.get(item.item_id, [])):
                results.append(item)
        return results

    def add_item(self, new_item: NewMenuItem) -> MenuItem:
        if new_item.prep_time_minutes < 0:
            raise ValueError("prep_time_minutes must be >= 0")
        price = to_decimal(new_item.price)
        if price < 0:
            raise ValueError("price must be >= 0")

        item_id = max(self._items, default=0) + 1
        item = MenuItem(
            item_id=item_id,
            name=new_item.name,
            category=new_item.category,
            price=price,
            description=new_item.description,
            is_veg=new_item.is_veg,
            prep_time_minutes=new_item.prep_time_minutes,
            active=new_item.active,
        )
        self._items[item_id] = item
        logger.info("catalog_add id=%s name=%r", item_id, item.name)
        return item

    def update_item(self, item_id: int, update: MenuItemUpdate) -> MenuItem:
        current = self.get(item_id)
        price = current.price
        if update.price is not None:
            price = to_decimal(update.price)
            if price < 0:
                raise ValueError("price must be >= 0")
        if update.prep_time_minutes is not None and update.prep_time_minutes < 0:
            raise ValueError("prep_time_minutes must be >= 0")

        updated = MenuItem(
            item_id=current.item_id,
            name=update.name if update.name is not None else current.name,
            category=update.category if update.category is not None else current.category,
            price=price,
            description=update.description if update.description is not None else current.description,
            is_veg=update.is_veg if update.is_veg is not None else current.is_veg,
            prep_time_minutes=(
                update.prep_time_minutes if update.prep_time_minutes is not None else current.prep_time_minutes
            ),
            active=update.active if update.active is not None else current.active,
        )
        self._items[item_id] = updated
        logger.info("catalog_update id=%s", item_id)
        return updated

    def set_active(self, item_id: int, active: bool) -> MenuItem:
        item = replace(self.get(item_id), active=active)
        self._items[item_id] = item
        logger.info("catalog_set_active id=%s active=%s", item_id, active)
        return item

    def delete_item(self, item_id: int) -> None:
        self.get(item_id)
        del self._items[item_id]
        self._aliases.pop(item_id, None)
        logger.info("catalog_delete id=%s", item_id)


def default_catalog() -> InMemoryCatalog:
    """Fresh catalog holding the sample menu."""
    items = seed_menu_items()
    return InMemoryCatalog(items, aliases={item.item_id: aliases_for_item(item.item_id) for item in items})
