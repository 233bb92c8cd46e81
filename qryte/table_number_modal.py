"""Table prompt shown before an order is submitted."""

from __future__ import annotations

from qryte.entry_modal import EntryModal

TAKEAWAY = 0
_MAX_DIGITS = 3


class TableNumberModal(EntryModal[int]):
    """Dismisses with a table number, ``TAKEAWAY`` (0) or ``None`` when cancelled."""

    heading = "Table"
    help_text = "0 for takeaway. Enter confirm. Esc cancel."

    def __init__(self, valid_numbers: set[int]) -> None:
        super().__init__(placeholder="table number")
        self.valid_numbers = valid_numbers

    def prompt(self) -> str:
        shown = ", ".join(str(n) for n in sorted(self.valid_numbers)) or "none"
        return f"Tables: {shown}"

    def parse(self, raw: str) -> int:
        if not raw:
            raise ValueError("Table number is required.")
        if not raw.isdigit() or len(raw) > _MAX_DIGITS:
            raise ValueError(f"Use up to {_MAX_DIGITS} digits.")
        number = int(raw)
        if number != TAKEAWAY and number not in self.valid_numbers:
            raise ValueError(f"No table {number}.")
        return number
