"""Ingredient stock and recipe-based deduction."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Mapping
from uuid import uuid4

from qryte.data import seed_inventory, seed_recipes
from qryte.errors import UnknownInventoryItem
from qryte.models import InventoryItem, InventoryUpdate, RecipeIngredient
from qryte.money import to_decimal

logger = logging.getLogger(__name__)


class Inventory:
    """In-memory stock levels plus the recipes that consume them."""

    def __init__(
        self,
        items: Iterable[InventoryItem] = (),
        recipes: Mapping[int, tuple[RecipeIngredient, ...]] | None = None,
    ) -> None:
        self._items: dict[str, InventoryItem] = {item.item_id: item for item in items}
        self._recipes: dict[int, tuple[RecipeIngredient, ...]] = dict(recipes or {})

    def get(self, item_id: str) -> InventoryItem:
        item = self._items.get(item_id)
        if item is None:
            raise UnknownInventoryItem(item_id)
        return item

    def list_items(self) -> list[InventoryItem]:
        return list(self._items.values())

    def recipe_for(self, menu_item_id: int) -> tuple[RecipeIngredient, ...] | None:
        return self._recipes.get(menu_item_id)

    def add_item(
        self,
        name: str,
        category: str,
        quantity: Decimal,
        unit: str,
        min_threshold: Decimal,
        unit_price: Decimal,
        supplier: str | None = None,
    ) -> InventoryItem:
        item = InventoryItem(
            item_id=uuid4().hex[:8],
            name=name,
            category=category,
            quantity=to_decimal(quantity),
            unit=unit,
            min_threshold=to_decimal(min_threshold),
            unit_price=to_decimal(unit_price),
            supplier=supplier,
            last_updated=datetime.now(timezone.utc),
        )
        self._items[item.item_id] = item
        logger.info("inventory_add id=%s name=%r", item.item_id, name)
        return item

    def update_item(self, item_id: str, update: InventoryUpdate) -> InventoryItem:
        current = self.get(item_id)
        updated = InventoryItem(
            item_id=current.item_id,
            name=update.name if update.name is not None else current.name,
            category=update.category if update.category is not None else current.category,
            quantity=to_decimal(update.quantity) if update.quantity is not None else current.quantity,
            unit=update.unit if update.unit is not None else current.unit,
            min_threshold=(
                to_decimal(update.min_threshold) if update.min_threshold is not None else current.min_threshold
            ),
            unit_price=to_decimal(update.unit_price) if update.unit_price is not None else current.unit_price,
            supplier=update.supplier if update.supplier is not None else current.supplier,
            last_updated=datetime.now(timezone.utc),
        )
        self._items[item_id] = updated
        return updated

    def deduct_for_menu_item(self, menu_item_id: int, quantity: int) -> bool:
        """
        Consume recipe ingredients for ``quantity`` portions of a dish.

        Returns False when the dish has no recipe. Ingredients missing from
        stock are skipped; stock is allowed to go negative and is reported
        through the low-stock warning.
        """
        recipe = self._recipes.get(menu_item_id)
        if recipe is None:
            logger.debug("inventory_no_recipe menu_item=%s", menu_item_id)
            return False

        now = datetime.now(timezone.utc)
        for ingredient in recipe:
            item = self._items.get(ingredient.inventory_item_id)
            if item is None:
                continue
            remaining = item.quantity - ingredient.quantity_needed * quantity
            self._items[item.item_id] = replace(item, quantity=remaining, last_updated=now)
            if remaining <= item.min_threshold:
                logger.warning("inventory_low id=%s name=%r remaining=%s %s", item.item_id, item.name, remaining, item.unit)

        logger.info("inventory_deduct menu_item=%s qty=%s", menu_item_id, quantity)
        return True

    def low_stock(self) -> list[InventoryItem]:
        return [item for item in self._items.values() if item.quantity <= item.min_threshold]


def default_inventory() -> Inventory:
    return Inventory(seed_inventory(), seed_recipes())
