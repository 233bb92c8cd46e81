"""One-field prompt screen shared by the table and coupon dialogs."""

from __future__ import annotations

from typing import TypeVar

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static

ResultT = TypeVar("ResultT")


class EntryModal(ModalScreen[ResultT | None]):
    """
    Ask for one value and dismiss with it once ``parse`` accepts it.

    Subclasses set ``heading``/``help_text`` and implement ``parse``, which
    raises ``ValueError`` with a message for the user when the text is not
    acceptable. Escape dismisses with ``None``.
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    CSS = """
    EntryModal {
        align: center middle;
        background: $background 60%;
    }

    EntryModal .entry-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    EntryModal .entry-heading {
        text-style: bold;
        color: white;
        margin-bottom: 1;
    }

    EntryModal .entry-prompt {
        color: white;
    }

    EntryModal #entry-error {
        color: #ffb3b3;
        height: auto;
    }

    EntryModal .entry-help {
        color: #dddddd;
    }
    """

    heading = ""
    help_text = "Enter confirm. Esc cancel."

    def __init__(self, placeholder: str = "") -> None:
        super().__init__()
        self.placeholder = placeholder
        self.error_message = ""

    def compose(self) -> ComposeResult:
        with Container(classes="entry-dialog"):
            yield Static(self.heading, classes="entry-heading")
            yield Static(self.prompt(), classes="entry-prompt")
            yield Input(placeholder=self.placeholder, id="entry-value")
            yield Static(id="entry-error")
            yield Static(self.help_text, classes="entry-help")

    def on_mount(self) -> None:
        self.query_one("#entry-value", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.error_message:
            self._show_error("")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        try:
            result = self.parse(event.value.strip())
        except ValueError as exc:
            self._show_error(str(exc))
            return
        self.dismiss(result)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def prompt(self) -> str:
        return ""

    def parse(self, raw: str) -> ResultT:
        raise NotImplementedError

    def _show_error(self, message: str) -> None:
        self.error_message = message
        self.query_one("#entry-error", Static).update(message)
