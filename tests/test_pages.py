from __future__ import annotations

import pytest

from indastreet.content import ContentStore
from indastreet.data import build_catalog, food_vendors, products_for_vendor
from indastreet.models import Page, PaymentMethod, RewardStatus, ShopItem, VendorType
from indastreet.pages import PAGE_RENDERERS, PageContext, render_page, toggle_payment_method
from indastreet.rendering import format_currency


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def auth_requests():
    return []


@pytest.fixture
def ctx(navigation, cart, session, catalog, auth_requests):
    return PageContext(
        navigation=navigation,
        cart=cart,
        session=session,
        content=ContentStore(),
        catalog=catalog,
        open_auth=auth_requests.append,
        sign_out=lambda: None,
    )


def vendor_by_id(catalog, vendor_id):
    return next(v for v in catalog.vendors if v.id == vendor_id)


@pytest.mark.parametrize(
    "price, text",
    [(25000, "Rp25K"), (1_500_000, "Rp1,5 Jt"), (2_000_000, "Rp2 Jt"), (500, "Rp500"), (18500, "Rp18,5K")],
)
def test_format_currency(price, text):
    assert format_currency(price) == text


def test_content_store_falls_back_on_missing_or_empty():
    store = ContentStore({"title": "Halo", "blank": ""})
    assert store.get("title", "Hello") == "Halo"
    assert store.get("blank", "Hello") == "Hello"
    assert store.get("missing", "Hello") == "Hello"


def test_catalog_lists_food_and_shop_vendors(catalog):
    types = {v.type for v in food_vendors(catalog)}
    assert types == {VendorType.FOOD, VendorType.SHOP}
    assert any(isinstance(p, ShopItem) for p in products_for_vendor(catalog, "kopi_jalanan"))
    assert products_for_vendor(catalog, "unknown") == []


def test_every_page_has_a_renderer():
    assert set(PAGE_RENDERERS) == set(Page) - {Page.LANDING}


def test_landing_until_initialized(ctx, navigation):
    navigation.navigate_to(Page.CART)
    assert render_page(ctx).title == "IndaStreet"


def test_every_page_renders_after_initialization(ctx, navigation, session):
    session.confirm_location("Ubud, Bali")
    for page in Page:
        navigation.navigate_to(page)
        view = render_page(ctx)
        assert view.title


def test_vendor_rows_carry_products(ctx, navigation, session, catalog):
    session.confirm_location("Ubud, Bali")
    navigation.select_vendor(vendor_by_id(catalog, "warung_bu_sri"))
    view = render_page(ctx)
    assert view.title == "Warung Bu Sri"
    assert {row.product.id for row in view.rows} >= {"nasi_goreng", "es_teh"}


def test_hotel_row_unlocks_guest_reward(ctx, navigation, session, cart, catalog):
    session.confirm_location("Ubud, Bali")
    navigation.select_vendor(vendor_by_id(catalog, "hotel_kencana"))
    view = render_page(ctx)
    view.rows[0].on_select()
    assert cart.guest_reward.status is RewardStatus.ACTIVE


def test_promo_video_opens_live_stream_with_voucher(ctx, navigation, session):
    session.confirm_location("Ubud, Bali")
    navigation.navigate_to(Page.PROMO_VIDEOS)
    render_page(ctx).rows[0].on_select()
    assert navigation.current_page is Page.LIVE_STREAM
    assert navigation.active_voucher is not None
    assert navigation.active_voucher.id == "live_10k"


def test_driver_profile_opens_image_modal(ctx, navigation, session, catalog):
    session.confirm_location("Ubud, Bali")
    navigation.select_driver_for_profile(catalog.vehicles[0])
    render_page(ctx).rows[0].on_select()
    assert navigation.is_profile_image_modal_open
    assert navigation.profile_image_modal_url


def test_profile_offers_auth_when_signed_out(ctx, navigation, session, auth_requests):
    session.confirm_location("Ubud, Bali")
    navigation.navigate_to(Page.PROFILE)
    view = render_page(ctx)
    view.rows[0].on_select()
    view.rows[1].on_select()
    assert auth_requests == ["sign_in", "sign_up"]


def test_toggle_payment_method(cart):
    toggle_payment_method(cart)
    assert cart.payment_method is PaymentMethod.TRANSFER
    toggle_payment_method(cart)
    assert cart.payment_method is PaymentMethod.CASH
