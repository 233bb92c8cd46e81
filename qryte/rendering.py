"""Rich text rendering helpers for the order console."""

from __future__ import annotations

from rich.text import Text

from qryte.models import Invoice, LineItem, MenuItem
from qryte.money import format_money, format_rate


def badge_style(is_veg: bool) -> str:
    """Return a consistent badge style for veg / non-veg tags."""
    if is_veg:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #b23a48"


def format_menu_item(item: MenuItem) -> Text:
    text = Text()
    text.append("V" if item.is_veg else "N", style=badge_style(item.is_veg))
    text.append(f" {item.name}")
    text.append(f"  {format_money(item.price)}", style="dim")
    return text


def format_line_item(line: LineItem) -> Text:
    text = Text()
    text.append(f"{line.quantity} x ", style="bold")
    text.append(line.name)
    text.append(f"  {format_money(line.line_total)}", style="dim")
    return text


def format_note_tags(note: str) -> Text:
    """Render a kitchen note as compact tags, one per comma-separated part."""
    text = Text()
    parts = [part.strip() for part in note.split(",") if part.strip()]
    for idx, part in enumerate(parts):
        if idx > 0:
            text.append(" ")
        text.append(f"[{part}]", style="white")
    return text


def format_totals(invoice: Invoice) -> Text:
    text = Text()
    text.append(f"Subtotal: {format_money(invoice.subtotal)}")
    if invoice.applied_coupon_code:
        text.append(f"\nDiscount ({invoice.applied_coupon_code}): -{format_money(invoice.discount_amount)}")
    text.append(f"\nGST ({format_rate(invoice.tax_rate)}): {format_money(invoice.tax_amount)}")
    text.append(f"\nTotal: {format_money(invoice.total)}", style="bold")
    return text
