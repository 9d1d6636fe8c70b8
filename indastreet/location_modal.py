"""Location + WhatsApp number verification modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from indastreet.session import SessionState
from indastreet.wizard import LocationWizard, WizardStep

_FIELDS = ("location", "phone")


class LocationModal(ModalScreen[None]):
    """Drives a LocationWizard; reset to the first step each time it is shown."""

    CSS = """
    LocationModal {
        align: center middle;
        background: $background 60%;
    }

    #location-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #location-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #location-body {
        color: white;
        margin-bottom: 1;
    }

    #location-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #location-help {
        color: #dddddd;
    }
    """

    def __init__(self, wizard: LocationWizard, session: SessionState) -> None:
        super().__init__()
        self.wizard = wizard
        self.session = session
        self.field = "location"
        self._suggestion_index = -1

    def compose(self) -> ComposeResult:
        with Container(id="location-dialog"):
            yield Static(id="location-title")
            yield Static(id="location-body")
            yield Static(id="location-error")
            yield Static(id="location-help")

    def on_mount(self) -> None:
        self.wizard.add_listener(self._refresh_content)
        self.wizard.reset()

    def on_unmount(self) -> None:
        self.wizard.remove_listener(self._refresh_content)

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.session.close_location_modal()
            event.stop()
            return

        if event.key == "enter":
            if self.wizard.step is WizardStep.LOCATION:
                self.wizard.submit_location()
            else:
                self.wizard.verify_code()
            event.stop()
            return

        if self.wizard.step is WizardStep.OTP:
            self._on_otp_key(event)
        else:
            self._on_location_key(event)

    def _on_location_key(self, event: Key) -> None:
        if event.key in {"tab", "down", "up"}:
            self.field = _FIELDS[(_FIELDS.index(self.field) + 1) % len(_FIELDS)]
            self._refresh_content()
            event.stop()
            return

        if event.key == "ctrl+g":
            self.app.run_worker(self.wizard.use_current_location(), group="geolocation")
            event.stop()
            return

        if event.key == "ctrl+t":
            self._suggestion_index = -1
            self.app.run_worker(self.wizard.suggest_locations(), group="autocomplete", exclusive=True)
            event.stop()
            return

        if event.key == "ctrl+n":
            if self.wizard.suggestions:
                self._suggestion_index = (self._suggestion_index + 1) % len(self.wizard.suggestions)
                self.wizard.set_location_input(self.wizard.suggestions[self._suggestion_index])
            event.stop()
            return

        if event.key == "backspace":
            if self.field == "location":
                self.wizard.set_location_input(self.wizard.location_input[:-1])
            else:
                self.wizard.set_phone_input(self.wizard.phone_input[:-1])
            event.stop()
            return

        if event.is_printable and event.character:
            if self.field == "location":
                self.wizard.set_location_input(self.wizard.location_input + event.character)
            elif event.character.isdigit():
                self.wizard.set_phone_input(self.wizard.phone_input + event.character)
            event.stop()

    def _on_otp_key(self, event: Key) -> None:
        if event.key == "ctrl+b":
            self.wizard.go_back()
            event.stop()
            return

        if event.key == "backspace":
            self.wizard.set_otp_input(self.wizard.otp_input[:-1])
            event.stop()
            return

        if event.is_printable and event.character and event.character.isdigit():
            self.wizard.set_otp_input(self.wizard.otp_input + event.character)
            event.stop()

    def _refresh_content(self) -> None:
        try:
            title = self.query_one("#location-title", Static)
        except NoMatches:
            return
        body = self.query_one("#location-body", Static)
        error = self.query_one("#location-error", Static)
        help_text = self.query_one("#location-help", Static)

        wizard = self.wizard
        if wizard.step is WizardStep.LOCATION:
            title.update("Set Your Location")
            content = Text(style="white")
            for name, label, value in (
                ("location", "Location", wizard.location_input),
                ("phone", "WhatsApp +62", wizard.phone_input),
            ):
                pointer = "➤ " if name == self.field else "  "
                style = "bold white" if name == self.field else "white"
                content.append(f"{pointer}{label}: {value}", style=style)
                if name == self.field:
                    content.append("|", style="bold")
                content.append("\n")
            if wizard.is_geocoding:
                content.append("Locating…", style="italic")
            elif wizard.suggestions:
                content.append(f"{len(wizard.suggestions)} suggestions (Ctrl+N to cycle)", style="dim")
            body.update(content)
            hints = "Tab switch field · Enter confirm & verify · Ctrl+G current location"
            if wizard.can_autocomplete:
                hints += " · Ctrl+T suggest"
            help_text.update(f"{hints} · Esc close")
        else:
            title.update("Verify Your Number")
            content = Text(style="white")
            content.append("For this demo, your code is: ")
            content.append(wizard.generated_code, style="bold #f59e0b")
            content.append(f"\n\n4-Digit Code: {wizard.otp_input}|")
            body.update(content)
            help_text.update("Digits only · Enter verify · Ctrl+B go back / change number · Esc close")

        error.update(wizard.error or "")
