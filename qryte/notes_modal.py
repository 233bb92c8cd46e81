"""Kitchen-note editor for one invoice line."""

from __future__ import annotations

from typing import NamedTuple

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from qryte.constant import KITCHEN_NOTE_PRESETS
from qryte.data import compose_kitchen_note, note_presets_for_category, split_kitchen_note
from qryte.models import LineItem
from qryte.rendering import format_line_item


class NoteRow(NamedTuple):
    kind: str  # "preset", "custom" or "add"
    value: str


class NotesModal(ModalScreen[str]):
    """
    Toggle the category's note presets and keep free-text notes for a line.

    Closing dismisses with the composed kitchen note. Free text is typed
    into an ``Input`` that only shows while the "Other note" row is open.
    """

    AUTO_FOCUS = None

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j,down", "move_cursor(1)", "Next"),
        ("k,up", "move_cursor(-1)", "Previous"),
        ("enter", "activate", "Toggle"),
    ]

    CSS = """
    NotesModal {
        align: center middle;
        background: $background 60%;
    }

    #notes-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #notes-body {
        color: white;
    }

    #notes-other {
        display: none;
        margin-top: 1;
    }

    #notes-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, line: LineItem, category: str) -> None:
        super().__init__()
        self.line = line
        self.preset_ids = note_presets_for_category(category)
        chosen, self.custom_notes = split_kitchen_note(line.note_for_kitchen)
        # Presets outside this category survive an edit as free text.
        self.custom_notes[:0] = [
            label
            for note_id, label in KITCHEN_NOTE_PRESETS.items()
            if note_id in chosen and note_id not in self.preset_ids
        ]
        self.chosen = chosen & set(self.preset_ids)
        self.cursor = 0
        self.editing_other = False

    @property
    def note(self) -> str:
        return compose_kitchen_note(self.chosen, self.custom_notes)

    def compose(self) -> ComposeResult:
        with Container(id="notes-dialog"):
            yield Static(Text("Kitchen Note", style="bold white"))
            yield Static(id="notes-body")
            yield Input(placeholder="other note", id="notes-other")
            yield Static(id="notes-help")

    def on_mount(self) -> None:
        self._render_body()

    def rows(self) -> list[NoteRow]:
        rows = [NoteRow("preset", note_id) for note_id in self.preset_ids]
        rows.extend(NoteRow("custom", text) for text in self.custom_notes)
        rows.append(NoteRow("add", ""))
        return rows

    def action_close(self) -> None:
        if self.editing_other:
            self._hide_input()
            return
        self.dismiss(self.note)

    def action_move_cursor(self, delta: int) -> None:
        self.cursor = (self.cursor + delta) % len(self.rows())
        self._render_body()

    def action_activate(self) -> None:
        row = self.rows()[self.cursor]
        if row.kind == "preset":
            self.chosen ^= {row.value}
        elif row.kind == "custom":
            self.custom_notes.remove(row.value)
        else:
            field = self.query_one("#notes-other", Input)
            field.value = ""
            field.display = True
            field.focus()
            self.editing_other = True
        self._render_body()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        # Commas separate note parts.
        text = " ".join(event.value.replace(",", " ").split())
        if text and text not in self.custom_notes:
            self.custom_notes.append(text)
        self._hide_input()
        self.cursor = len(self.rows()) - 1
        self._render_body()

    def _hide_input(self) -> None:
        field = self.query_one("#notes-other", Input)
        field.value = ""
        field.display = False
        self.editing_other = False
        self.set_focus(None)
        self._render_body()

    def _render_body(self) -> None:
        rows = self.rows()
        self.cursor = min(self.cursor, len(rows) - 1)

        body = Text(style="white")
        body.append_text(format_line_item(self.line))
        body.append("\n")
        for idx, row in enumerate(rows):
            body.append("\n➤ " if idx == self.cursor else "\n  ")
            if row.kind == "preset":
                on = row.value in self.chosen
                body.append(f"[{'x' if on else ' '}] {KITCHEN_NOTE_PRESETS[row.value]}", style="bold" if on else "")
            elif row.kind == "custom":
                body.append(f"[x] {row.value}", style="bold")
            else:
                body.append("[+] Other note")
        self.query_one("#notes-body", Static).update(body)

        help_line = "Type, Enter add, Esc back" if self.editing_other else "J/K/↑/↓ move, Enter toggle/add, Esc/q close"
        self.query_one("#notes-help", Static).update(help_line)
