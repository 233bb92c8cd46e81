"""Seed data wrapped into domain models."""

from __future__ import annotations

from decimal import Decimal

from qryte.constant import (
    CATEGORY_NOTE_DEFAULTS,
    INVENTORY_ITEMS,
    KITCHEN_NOTE_PRESETS,
    MENU_ITEMS,
    RECIPES,
    SEARCH_ALIASES_BY_ITEM,
    TABLES,
)
from qryte.models import InventoryItem, MenuItem, RecipeIngredient, Table, TableStatus


def seed_menu_items() -> list[MenuItem]:
    """Build the sample menu as ``MenuItem`` values."""
    return [
        MenuItem(
            item_id=int(row["id"]),  # type: ignore[arg-type]
            name=str(row["name"]),
            category=str(row["category"]),
            price=Decimal(str(row["price"])),
            description=str(row["description"]),
            is_veg=bool(row["veg"]),
            prep_time_minutes=int(row["prep_time"]),  # type: ignore[arg-type]
        )
        for row in MENU_ITEMS
    ]


def seed_tables() -> list[Table]:
    return [
        Table(
            table_id=int(row["id"]),  # type: ignore[arg-type]
            number=int(row["number"]),  # type: ignore[arg-type]
            name=f"Table {row['number']}",
            capacity=int(row["capacity"]),  # type: ignore[arg-type]
            status=TableStatus(str(row["status"])),
        )
        for row in TABLES
    ]


def seed_inventory() -> list[InventoryItem]:
    return [
        InventoryItem(
            item_id=str(row["id"]),
            name=str(row["name"]),
            category=str(row["category"]),
            quantity=Decimal(str(row["quantity"])),
            unit=str(row["unit"]),
            min_threshold=Decimal(str(row["min_threshold"])),
            unit_price=Decimal(str(row["unit_price"])),
            supplier=str(row["supplier"]) if row.get("supplier") is not None else None,
        )
        for row in INVENTORY_ITEMS
    ]


def seed_recipes() -> dict[int, tuple[RecipeIngredient, ...]]:
    return {
        menu_item_id: tuple(RecipeIngredient(inv_id, Decimal(qty)) for inv_id, qty in ingredients)
        for menu_item_id, ingredients in RECIPES.items()
    }


def aliases_for_item(item_id: int) -> list[str]:
    return list(SEARCH_ALIASES_BY_ITEM.get(item_id, []))


def note_presets_for_category(category: str) -> list[str]:
    """Resolve which kitchen-note preset ids apply to a menu category."""
    return [note_id for note_id in CATEGORY_NOTE_DEFAULTS.get(category, []) if note_id in KITCHEN_NOTE_PRESETS]


def compose_kitchen_note(preset_ids: set[str], custom_notes: list[str]) -> str:
    """Join selected presets (catalog order) and free-text notes into one kitchen note."""
    parts = [label for note_id, label in KITCHEN_NOTE_PRESETS.items() if note_id in preset_ids]
    parts.extend(note.strip() for note in custom_notes if note.strip())
    return ", ".join(parts)


def split_kitchen_note(note: str) -> tuple[set[str], list[str]]:
    """Inverse of ``compose_kitchen_note``: recover preset ids and free text."""
    label_to_id = {label.lower(): note_id for note_id, label in KITCHEN_NOTE_PRESETS.items()}
    preset_ids: set[str] = set()
    custom: list[str] = []
    for part in note.split(","):
        text = part.strip()
        if not text:
            continue
        note_id = label_to_id.get(text.lower())
        if note_id is not None:
            preset_ids.add(note_id)
        elif text not in custom:
            custom.append(text)
    return preset_ids, custom
