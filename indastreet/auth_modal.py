"""Email + password sign-in / sign-up modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from indastreet.errors import ExternalServiceError
from indastreet.logs import get_logger
from indastreet.models import Credentials
from indastreet.session import SessionState

log = get_logger(__name__)


class AuthModal(ModalScreen[bool]):
    """Collects credentials; dismisses with True once signed in."""

    CSS = """
    AuthModal {
        align: center middle;
        background: $background 60%;
    }

    #auth-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #auth-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #auth-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #auth-help {
        color: #dddddd;
    }
    """

    def __init__(self, session: SessionState, mode: str = "sign_in") -> None:
        super().__init__()
        self.session = session
        self.mode = mode
        self.fields = ["name", "email", "password"] if mode == "sign_up" else ["email", "password"]
        self.values = {name: "" for name in self.fields}
        self.field_index = 0
        self.error = ""
        self.busy = False

    def compose(self) -> ComposeResult:
        with Container(id="auth-dialog"):
            yield Static("Create Account" if self.mode == "sign_up" else "Sign In", id="auth-title")
            yield Static(id="auth-body")
            yield Static(id="auth-error")
            yield Static("Tab next field · Enter submit · Esc cancel", id="auth-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(False)
            event.stop()
            return

        if event.key in {"tab", "down", "up"}:
            step = -1 if event.key == "up" else 1
            self.field_index = (self.field_index + step) % len(self.fields)
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            if not self.busy:
                self.run_worker(self._submit(), exclusive=True)
            event.stop()
            return

        name = self.fields[self.field_index]
        if event.key == "backspace":
            self.values[name] = self.values[name][:-1]
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.values[name] += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    async def _submit(self) -> None:
        email = self.values["email"].strip()
        password = self.values["password"]
        if not email or not password:
            self.error = "Email and password are required."
            self._refresh_content()
            return

        credentials = Credentials(email=email, password=password, name=self.values.get("name", "").strip() or None)
        self.busy = True
        self._refresh_content()
        try:
            if self.mode == "sign_up":
                await self.session.sign_up(credentials)
            else:
                await self.session.sign_in(credentials)
        except ExternalServiceError as exc:
            log.info("auth_failed mode=%s reason=%r", self.mode, str(exc))
            self.error = str(exc)
            self.busy = False
            self._refresh_content()
            return

        self.dismiss(True)

    def _refresh_content(self) -> None:
        try:
            body = self.query_one("#auth-body", Static)
        except NoMatches:
            return
        content = Text(style="white")
        for idx, name in enumerate(self.fields):
            value = self.values[name]
            shown = "•" * len(value) if name == "password" else value
            pointer = "➤ " if idx == self.field_index else "  "
            content.append(f"{pointer}{name.title()}: {shown}")
            if idx == self.field_index:
                content.append("|", style="bold")
            content.append("\n")
        if self.busy:
            content.append("Working…", style="italic")
        body.update(content)
        self.query_one("#auth-error", Static).update(self.error)
