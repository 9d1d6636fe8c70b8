from __future__ import annotations

import pytest

from indastreet.models import Page
from indastreet.shell import AppShell, page_layout


@pytest.fixture
def shell(navigation, cart, session):
    app_shell = AppShell(navigation, cart, session)
    yield app_shell
    app_shell.detach()


def test_initialization_redirects_landing_to_food(shell, navigation, session):
    session.confirm_location("Ubud, Bali", "812345678")
    assert navigation.current_page is Page.FOOD


def test_redirect_fires_once_per_transition(shell, navigation, session):
    session.confirm_location("Ubud, Bali")
    navigation.navigate_to(Page.LANDING)
    session.confirm_location("Yogyakarta")
    assert navigation.current_page is Page.LANDING


def test_no_redirect_when_not_on_landing(shell, navigation, session):
    navigation.navigate_to(Page.PROFILE)
    session.confirm_location("Ubud, Bali")
    assert navigation.current_page is Page.PROFILE


def test_cart_cleared_when_leaving_shopping_pages(shell, navigation, cart, nasi):
    navigation.navigate_to(Page.FOOD)
    cart.update_quantity(nasi, 2)
    navigation.navigate_to(Page.HOME)
    assert len(cart) == 0


def test_cart_survives_moves_between_shopping_pages(shell, navigation, cart, nasi, food_vendor):
    navigation.navigate_to(Page.FOOD)
    cart.update_quantity(nasi, 2)
    navigation.select_vendor(food_vendor)
    navigation.navigate_to(Page.CART)
    assert cart.find("nasi_goreng").quantity == 2


def test_cart_filled_off_shopping_pages_is_emptied(shell, navigation, cart, nasi):
    navigation.navigate_to(Page.CHAT)
    cart.update_quantity(nasi, 1)
    assert len(cart) == 0


def test_empty_cart_is_not_cleared_again(shell, navigation, cart):
    calls = []
    cart.add_listener(lambda: calls.append(len(cart)))
    navigation.navigate_to(Page.HOME)
    assert calls == []


def test_detach_stops_enforcement(navigation, cart, session, nasi):
    app_shell = AppShell(navigation, cart, session)
    app_shell.detach()
    navigation.navigate_to(Page.FOOD)
    cart.update_quantity(nasi, 1)
    navigation.navigate_to(Page.HOME)
    assert len(cart) == 1


@pytest.mark.parametrize(
    "page, padded, header, footer, background",
    [
        (Page.HOME, False, True, True, True),
        (Page.FOOD, False, False, False, False),
        (Page.CHAT, False, True, False, False),
        (Page.PROMO_VIDEOS, False, False, False, False),
        (Page.CART, True, True, True, False),
        (Page.PROFILE, True, True, True, False),
    ],
)
def test_page_layout(page, padded, header, footer, background):
    layout = page_layout(page)
    assert (layout.padded, layout.show_header, layout.show_footer, layout.app_background) == (
        padded,
        header,
        footer,
        background,
    )


def test_layout_follows_current_page(shell, navigation):
    navigation.navigate_to(Page.FOOD)
    assert not shell.layout.show_header
