"""Thermal printing of kitchen tickets and bills."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from qryte.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from qryte.errors import PrinterUnavailable
from qryte.models import Invoice
from qryte.money import format_money, format_rate

logger = logging.getLogger(__name__)

# Extra vertical headroom so descenders are not clipped on thermal output.
_LINE_EXTRA_PX = 12
_TAIL_SPACER_PX = 60
_FONT_OVERRIDE_ENV = "QRYTE_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def ticket_lines(invoice: Invoice, table_number: int | None = None) -> list[str]:
    """Plain-text lines for one printed ticket, amounts rounded for display."""
    lines: list[str] = []
    header = invoice.invoice_id
    if table_number is not None:
        header = f"T{table_number}  {header}"
    lines.append(header)

    for line in invoice.line_items:
        lines.append(f"{line.quantity} x {line.name}  {format_money(line.line_total, symbol='')}")
        if line.note_for_kitchen:
            lines.append(f"    {line.note_for_kitchen}")

    lines.append(f"Subtotal  {format_money(invoice.subtotal, symbol='')}")
    if invoice.applied_coupon_code:
        lines.append(f"{invoice.applied_coupon_code}  -{format_money(invoice.discount_amount, symbol='')}")
    lines.append(f"GST {format_rate(invoice.tax_rate)}  {format_money(invoice.tax_amount, symbol='')}")
    lines.append(f"TOTAL  {format_money(invoice.total, symbol='')}")
    return lines


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. QRYTE_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise PrinterUnavailable(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def render_line(text: str, font: object) -> object:
    """Render one text line onto a 1-bit canvas the width of the paper."""
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    bbox = draw.textbbox((0, 0), text, font=font)
    text_height = bbox[3] - bbox[1]
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    return img


def print_invoice(
    invoice: Invoice,
    table_number: int | None = None,
    printer: object | None = None,
    font: object | None = None,
) -> None:
    """
    Print ``invoice`` as a ticket.

    ``printer`` defaults to the configured USB device; any escpos printer
    (e.g. ``escpos.printer.Dummy``) can be passed instead.
    """
    try:
        from PIL import Image, ImageFont
    except ImportError as exc:
        raise PrinterUnavailable(f"Printer dependencies unavailable: {exc}") from exc

    if printer is None:
        try:
            from escpos.printer import Usb

            printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
        except Exception as exc:
            raise PrinterUnavailable(f"Printer unavailable: {exc}") from exc

    if font is None:
        font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)

    for text in ticket_lines(invoice, table_number):
        printer.image(render_line(text, font))
    printer.image(Image.new("1", (PRINTER_WIDTH_PX, _TAIL_SPACER_PX), color=1))
    printer.cut()
    logger.info("ticket_printed invoice=%s table=%s", invoice.invoice_id, table_number)
