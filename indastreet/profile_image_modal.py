"""Profile image preview modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from indastreet.navigation import NavigationState


class ProfileImageModal(ModalScreen[None]):
    """Shows the profile image url held by the navigation state."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    ProfileImageModal {
        align: center middle;
        background: $background 80%;
    }

    #profile-image-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #profile-image-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, navigation: NavigationState) -> None:
        super().__init__()
        self.navigation = navigation

    def compose(self) -> ComposeResult:
        with Container(id="profile-image-dialog"):
            yield Static(self.navigation.profile_image_modal_url or "", id="profile-image-url")
            yield Static("Esc / q / Ctrl+C to close", id="profile-image-help")

    def action_close(self) -> None:
        self.navigation.close_profile_image_modal()
