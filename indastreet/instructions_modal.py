"""Special instructions modal screen for one cart line."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from indastreet.cart import CartState
from indastreet.config import MAX_SPECIAL_INSTRUCTIONS
from indastreet.rendering import format_cart_line


class InstructionsModal(ModalScreen[None]):
    """Free-text note for the kitchen, saved onto the cart line on Enter."""

    CSS = """
    InstructionsModal {
        align: center middle;
        background: $background 60%;
    }

    #instructions-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #instructions-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #instructions-body {
        margin-bottom: 1;
        color: white;
    }

    #instructions-help {
        color: #dddddd;
    }
    """

    def __init__(self, cart: CartState, item_id: str) -> None:
        super().__init__()
        self.cart = cart
        self.item_id = item_id
        entry = cart.find(item_id)
        self.value = entry.special_instructions if entry is not None else ""

    def compose(self) -> ComposeResult:
        with Container(id="instructions-dialog"):
            yield Static("Special Instructions", id="instructions-title")
            yield Static(id="instructions-body")
            yield Static("Enter save · Esc cancel", id="instructions-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss()
            event.stop()
            return

        if event.key == "enter":
            self.cart.set_instructions(self.item_id, self.value)
            self.dismiss()
            event.stop()
            return

        if event.key == "backspace":
            self.value = self.value[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if len(self.value) < MAX_SPECIAL_INSTRUCTIONS:
                self.value += event.character
            self._refresh_content()

        # Ignore all non-text keys while typing.
        event.stop()

    def _refresh_content(self) -> None:
        try:
            body = self.query_one("#instructions-body", Static)
        except NoMatches:
            return
        content = Text(style="white")
        entry = self.cart.find(self.item_id)
        if entry is not None:
            content.append_text(format_cart_line(entry))
            content.append("\n\n")
        content.append(f"{self.value}|")
        content.append(f"\n{len(self.value)}/{MAX_SPECIAL_INSTRUCTIONS}", style="dim")
        body.update(content)
