"""Main Textual app class."""

from __future__ import annotations

import random
from datetime import datetime

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from indastreet.auth_modal import AuthModal
from indastreet.cart import CartState
from indastreet.config import DRAWER_CLOCK_TICK_SECONDS
from indastreet.content import ContentStore
from indastreet.data import build_catalog
from indastreet.geo import Geocoder, Geolocator, PlacesAutocomplete, build_autocomplete, build_geocoder, build_geolocator
from indastreet.identity import IdentityService, build_identity_service
from indastreet.instructions_modal import InstructionsModal
from indastreet.location_modal import LocationModal
from indastreet.logs import get_logger
from indastreet.models import Catalog, Language, Page, PageLayout
from indastreet.navigation import NavigationState
from indastreet.pages import PageContext, PageRow, PageView, render_page, toggle_payment_method
from indastreet.profile_image_modal import ProfileImageModal
from indastreet.rendering import format_currency, format_notification
from indastreet.scheduling import ScheduledTask, Scheduler, TextualScheduler
from indastreet.session import SessionState
from indastreet.shell import AppShell, page_layout
from indastreet.wizard import LocationWizard

log = get_logger(__name__)

NAV_KEYS: dict[str, Page] = {
    "h": Page.HOME,
    "f": Page.FOOD,
    "c": Page.CART,
    "d": Page.FOOD_DIRECTORY,
    "t": Page.CHAT,
    "v": Page.PROMO_VIDEOS,
    "p": Page.PROFILE,
    "r": Page.RESTAURANT_DASHBOARD,
}

LANGUAGE_KEYS: dict[str, Language] = {"e": Language.EN, "i": Language.ID}

_LANDING_LAYOUT = PageLayout(padded=True, show_header=False, show_footer=False, app_background=True)


class MarketApp(App):
    """IndaStreet marketplace: food, stays, rides and rewards in the terminal."""

    TITLE = "IndaStreet"
    SUB_TITLE = "Street food · Stays · Rides"

    CSS = """
    Screen {
        layout: vertical;
    }

    #toast {
        height: auto;
        padding: 0 1;
        background: $boost;
    }

    #main-layout {
        height: 1fr;
    }

    #main-layout.app-background {
        background: #1c140d;
    }

    #side-drawer {
        width: 28;
        border: round $secondary;
        padding: 1;
    }

    #page-pane {
        width: 1fr;
        border: round $primary;
    }

    #page-pane.padded {
        padding: 1 2;
    }

    #page-rows {
        height: 1fr;
        padding: 0 1;
    }

    #footer-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "select_row", "Open"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        identity: IdentityService | None = None,
        geolocator: Geolocator | None = None,
        geocoder: Geocoder | None = None,
        autocomplete: PlacesAutocomplete | None = None,
        catalog: Catalog | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self.scheduler = scheduler or TextualScheduler(self)
        self.content = ContentStore()
        self.catalog = catalog or build_catalog()
        self.navigation = NavigationState(self.scheduler)
        self.cart = CartState(self.scheduler, notify=self.navigation.show_notification)
        self.session = SessionState(identity or build_identity_service())
        self.wizard = LocationWizard(
            self.session,
            geolocator or build_geolocator(),
            geocoder or build_geocoder(),
            autocomplete or build_autocomplete(),
            rng=rng,
        )
        self.shell = AppShell(self.navigation, self.cart, self.session)
        self.drawer_open = False
        self._clock_task: ScheduledTask | None = None
        self._location_modal: LocationModal | None = None
        self._image_modal: ProfileImageModal | None = None
        self._rendered_page: Page | None = None
        self._clock_text = ""
        self._page_view = PageView(title="")

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="toast")
        with Horizontal(id="main-layout"):
            yield Static(id="side-drawer")
            with Vertical(id="page-pane"):
                yield Static(classes="pane-title", id="page-title")
                yield Static(id="page-intro")
                yield Static(id="page-rows")
        yield Static(id="footer-bar")

    def on_mount(self) -> None:
        for store in (self.navigation, self.cart, self.session):
            store.add_listener(self._on_state_change)
        self.run_worker(self.session.restore(), group="session")
        log.info("app_mounted")
        self._refresh_all()

    def on_unmount(self) -> None:
        self._stop_clock()
        self.navigation.close()
        self.cart.close()
        self.shell.detach()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not event.is_printable or not event.character:
            return

        key = event.character.lower()
        if not self.session.initialized:
            if key in LANGUAGE_KEYS:
                self.session.select_language(LANGUAGE_KEYS[key])
                event.stop()
            elif key == "l":
                self.session.open_location_modal()
                event.stop()
            return

        if key in NAV_KEYS:
            self.navigation.navigate_to(NAV_KEYS[key])
        elif key == "j":
            self.action_move_cursor(1)
        elif key == "k":
            self.action_move_cursor(-1)
        elif key in {"+", "="}:
            self._change_selected_quantity(1)
        elif key == "-":
            self._change_selected_quantity(-1)
        elif key == "x":
            self._remove_selected()
        elif key == "i":
            self._edit_instructions()
        elif key == "m":
            toggle_payment_method(self.cart)
        elif key == "s":
            self._open_live_stream()
        elif key == "l":
            self.session.open_location_modal()
        elif key == "n":
            self.navigation.hide_notification()
        elif key == "o":
            self.toggle_drawer()
        else:
            return
        event.stop()

    def action_move_cursor(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        rows = self._page_view.rows
        if not rows:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(rows)
        self._refresh_rows()

    def action_select_row(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        row = self._selected_row()
        if row is None or row.on_select is None:
            return
        row.on_select()

    def toggle_drawer(self) -> None:
        self.drawer_open = not self.drawer_open
        if self.drawer_open:
            self._tick_clock()
            self._clock_task = self.scheduler.call_every(DRAWER_CLOCK_TICK_SECONDS, self._tick_clock)
        else:
            self._stop_clock()
        self._refresh_drawer()

    def open_auth(self, mode: str) -> None:
        self.push_screen(AuthModal(self.session, mode))

    def sign_out(self) -> None:
        self.run_worker(self.session.sign_out(), group="session")

    def _on_state_change(self) -> None:
        self._sync_location_modal()
        self._sync_profile_image_modal()
        self._refresh_all()

    def _sync_location_modal(self) -> None:
        if self.session.show_location_modal and self._location_modal is None:
            self._location_modal = LocationModal(self.wizard, self.session)
            self.push_screen(self._location_modal)
        elif not self.session.show_location_modal and self._location_modal is not None:
            modal, self._location_modal = self._location_modal, None
            modal.dismiss()

    def _sync_profile_image_modal(self) -> None:
        is_open = self.navigation.is_profile_image_modal_open
        if is_open and self._image_modal is None:
            self._image_modal = ProfileImageModal(self.navigation)
            self.push_screen(self._image_modal)
        elif not is_open and self._image_modal is not None:
            modal, self._image_modal = self._image_modal, None
            modal.dismiss()

    def _page_context(self) -> PageContext:
        return PageContext(
            navigation=self.navigation,
            cart=self.cart,
            session=self.session,
            content=self.content,
            catalog=self.catalog,
            open_auth=self.open_auth,
            sign_out=self.sign_out,
        )

    def _layout(self) -> PageLayout:
        if not self.session.initialized:
            return _LANDING_LAYOUT
        return page_layout(self.navigation.current_page)

    def _selected_row(self) -> PageRow | None:
        rows = self._page_view.rows
        if not (0 <= self.selected_index < len(rows)):
            return None
        return rows[self.selected_index]

    def _change_selected_quantity(self, delta: int) -> None:
        row = self._selected_row()
        if row is None or row.product is None:
            return
        entry = self.cart.find(row.product.id)
        current = entry.quantity if entry is not None else 0
        voucher = self.navigation.voucher_for(row.product) if self.navigation.current_page is Page.VENDOR else None
        self.cart.update_quantity(row.product, current + delta, voucher)

    def _remove_selected(self) -> None:
        row = self._selected_row()
        if row is None or row.product is None or self.navigation.current_page is not Page.CART:
            return
        self.cart.remove(row.product.id)

    def _edit_instructions(self) -> None:
        row = self._selected_row()
        if row is None or row.product is None or self.navigation.current_page is not Page.CART:
            return
        self.push_screen(InstructionsModal(self.cart, row.product.id))

    def _open_live_stream(self) -> None:
        vendor = self.navigation.current_vendor
        if vendor is None or self.navigation.current_page is not Page.VENDOR:
            return
        voucher = self.catalog.vouchers[0] if self.catalog.vouchers else None
        self.navigation.navigate_to_live_stream(vendor, voucher)

    def _tick_clock(self) -> None:
        self._clock_text = datetime.now().strftime("%H:%M")
        self._refresh_drawer()

    def _stop_clock(self) -> None:
        if self._clock_task is not None:
            self._clock_task.cancel()
            self._clock_task = None

    def _refresh_all(self) -> None:
        self._refresh_chrome()
        self._refresh_page()
        self._refresh_drawer()

    def _refresh_chrome(self) -> None:
        try:
            toast = self.query_one("#toast", Static)
        except NoMatches:
            return
        notification = self.navigation.notification
        toast.display = notification is not None
        toast.update(format_notification(notification))

        layout = self._layout()
        self.query_one(Header).display = layout.show_header
        self.query_one("#page-pane").set_class(layout.padded, "padded")
        self.query_one("#main-layout").set_class(layout.app_background, "app-background")

        footer = self.query_one("#footer-bar", Static)
        footer.display = layout.show_footer
        footer.update(
            f"H home · F food · C cart ({self.cart.item_count()}) · D directory · T chat · "
            f"V videos · P profile · L location · O menu · Ctrl+Q quit"
        )

    def _refresh_page(self) -> None:
        try:
            title = self.query_one("#page-title", Static)
        except NoMatches:
            return

        page = self.navigation.current_page if self.session.initialized else Page.LANDING
        if page is not self._rendered_page:
            self._rendered_page = page
            self.selected_index = 0
            self.query_one("#page-pane").scroll_home(animate=False)

        try:
            self._page_view = render_page(self._page_context())
        except Exception:
            log.exception("page_render_failed page=%s", page.value)
            self._page_view = PageView(
                title="Something went wrong.",
                intro=Text("An unexpected error occurred. Please try another page."),
            )

        title.update(self._page_view.title)
        self.query_one("#page-intro", Static).update(self._page_view.intro)
        self._refresh_rows()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_rows(self) -> None:
        try:
            rows_widget = self.query_one("#page-rows", Static)
        except NoMatches:
            return
        rows = self._page_view.rows
        if not rows:
            rows_widget.update(self._page_view.empty_text)
            return

        if self.selected_index >= len(rows):
            self.selected_index = len(rows) - 1

        visible_rows = self._visible_rows(rows_widget)
        start, end = self._window_bounds(len(rows), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(rows[idx].label)

        if end < len(rows):
            lines.append("\n⋮", style="dim")

        rows_widget.update(lines)

    def _refresh_drawer(self) -> None:
        try:
            drawer = self.query_one("#side-drawer", Static)
        except NoMatches:
            return
        drawer.display = self.drawer_open
        if not self.drawer_open:
            return
        text = Text()
        text.append(self._clock_text, style="bold")
        text.append("\n\n")
        if self.session.user is not None:
            text.append(f"{self.session.user.email}\n")
        if self.session.location:
            text.append(f"{self.session.location}\n", style="dim")
        if self.cart.guest_reward.active:
            text.append("Guest reward −5% active\n", style="green")
        if self.cart.items:
            text.append(f"Cart total {format_currency(self.cart.total())}\n")
        drawer.update(text)
