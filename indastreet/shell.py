"""Cross-store rules of the app shell: redirects, cart auto-clear, layout."""

from __future__ import annotations

from indastreet.cart import CartState
from indastreet.constant import (
    NO_PADDING_PAGES,
    PAGES_WITH_APP_BACKGROUND,
    PAGES_WITHOUT_FOOTER,
    PAGES_WITHOUT_HEADER,
    SHOPPING_PAGES,
)
from indastreet.logs import get_logger
from indastreet.models import Page, PageLayout
from indastreet.navigation import NavigationState
from indastreet.session import SessionState

log = get_logger(__name__)


def page_layout(page: Page) -> PageLayout:
    """Layout flags for ``page``; no state involved."""
    return PageLayout(
        padded=page not in NO_PADDING_PAGES,
        show_header=page not in PAGES_WITHOUT_HEADER,
        show_footer=page not in PAGES_WITHOUT_FOOTER,
        app_background=page in PAGES_WITH_APP_BACKGROUND,
    )


class AppShell:
    """
    Observes the navigation, cart and session stores.

    Two rules are enforced after every change:

    - a session that just became initialized while still on the landing page
      is sent to the food listing, once per transition;
    - a non-empty cart is cleared whenever the current page is not a
      shopping page.
    """

    def __init__(self, navigation: NavigationState, cart: CartState, session: SessionState) -> None:
        self.navigation = navigation
        self.cart = cart
        self.session = session
        self._was_initialized = session.initialized
        navigation.add_listener(self._on_navigation_change)
        cart.add_listener(self._on_cart_change)
        session.add_listener(self._on_session_change)

    def detach(self) -> None:
        self.navigation.remove_listener(self._on_navigation_change)
        self.cart.remove_listener(self._on_cart_change)
        self.session.remove_listener(self._on_session_change)

    @property
    def layout(self) -> PageLayout:
        return page_layout(self.navigation.current_page)

    def _on_session_change(self) -> None:
        initialized = self.session.initialized
        just_initialized = initialized and not self._was_initialized
        self._was_initialized = initialized
        if just_initialized and self.navigation.current_page is Page.LANDING:
            log.info("redirect_after_initialization to=%s", Page.FOOD.value)
            self.navigation.navigate_to(Page.FOOD)

    def _on_navigation_change(self) -> None:
        self._enforce_cart_scope()

    def _on_cart_change(self) -> None:
        self._enforce_cart_scope()

    def _enforce_cart_scope(self) -> None:
        if len(self.cart) and self.navigation.current_page not in SHOPPING_PAGES:
            log.info("cart_auto_cleared page=%s items=%d", self.navigation.current_page.value, len(self.cart))
            self.cart.clear()
