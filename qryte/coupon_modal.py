"""Coupon code prompt."""

from __future__ import annotations

from qryte.entry_modal import EntryModal

_MAX_CODE_LENGTH = 16


class CouponModal(EntryModal[str]):
    """Dismisses with an upper-cased code; an empty code removes the applied coupon."""

    heading = "Coupon"
    help_text = "Enter apply. Empty Enter removes. Esc cancel."

    def __init__(self, current: str | None = None) -> None:
        super().__init__(placeholder=f"applied: {current}" if current else "code")
        self.current = current

    def parse(self, raw: str) -> str:
        code = raw.upper()
        if code and not code.isalnum():
            raise ValueError("Letters and digits only.")
        if len(code) > _MAX_CODE_LENGTH:
            raise ValueError(f"At most {_MAX_CODE_LENGTH} characters.")
        return code
