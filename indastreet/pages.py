"""Page views: one renderer per page, selected through a render table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from rich.text import Text

from indastreet.cart import CartState
from indastreet.content import ContentStore
from indastreet.data import food_vendors, products_for_vendor
from indastreet.models import Catalog, Page, PaymentMethod, Product, VendorType
from indastreet.navigation import NavigationState
from indastreet.rendering import format_cart_line, format_currency, format_vendor_label
from indastreet.session import SessionState


@dataclass
class PageRow:
    """A selectable line; Enter runs ``on_select``, +/- adjust ``product``."""

    label: Text
    on_select: Callable[[], None] | None = None
    product: Product | None = None


@dataclass
class PageView:
    title: str
    intro: Text = field(default_factory=Text)
    rows: list[PageRow] = field(default_factory=list)
    empty_text: str = ""


@dataclass
class PageContext:
    navigation: NavigationState
    cart: CartState
    session: SessionState
    content: ContentStore
    catalog: Catalog
    open_auth: Callable[[str], None]
    sign_out: Callable[[], None]


def _text(line: str, style: str = "") -> Text:
    return Text(line, style=style)


def render_landing(ctx: PageContext) -> PageView:
    intro = Text()
    intro.append(ctx.content.get("landing-tagline", "Welcome to IndaStreet."), style="bold")
    intro.append("\n\n")
    intro.append(ctx.content.get("landing-language-prompt", "Select your language:"))
    intro.append("\n  E  English\n  I  Bahasa Indonesia")
    return PageView(title="IndaStreet", intro=intro)


def render_home(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    rows = [
        PageRow(_text("Street Food"), lambda: nav.navigate_to(Page.FOOD)),
        PageRow(_text("Food Directory"), lambda: nav.navigate_to(Page.FOOD_DIRECTORY)),
        PageRow(_text("Promo Videos"), lambda: nav.navigate_to(Page.PROMO_VIDEOS)),
    ]
    for vendor in ctx.catalog.vendors:
        if vendor.type in {VendorType.HOTEL, VendorType.VILLA, VendorType.MASSAGE}:
            rows.append(PageRow(format_vendor_label(vendor), lambda v=vendor: nav.select_vendor(v)))
    for destination in ctx.catalog.destinations:
        label = Text(f"{destination.name}  ", style="bold")
        label.append(destination.category, style="dim")
        rows.append(PageRow(label, lambda d=destination: nav.select_destination(d)))
    for vehicle in ctx.catalog.vehicles:
        rows.append(PageRow(_text(f"Reviews: {vehicle.name} ({vehicle.driver})"), lambda v=vehicle: nav.select_vehicle_for_reviews(v)))
    intro = _text(ctx.content.get("home-tagline", "At Your Fingertips"), "italic")
    return PageView(title="Home", intro=intro, rows=rows)


def render_food(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    rows = [PageRow(format_vendor_label(v), lambda v=v: nav.select_vendor(v)) for v in food_vendors(ctx.catalog)]
    return PageView(title=ctx.content.get("food-title", "Street Food"), rows=rows, empty_text="No vendors nearby.")


def render_food_directory(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    rows = [PageRow(format_vendor_label(v), lambda v=v: nav.select_vendor(v)) for v in ctx.catalog.vendors]
    return PageView(title="Food Directory", rows=rows)


def render_vendor(ctx: PageContext) -> PageView:
    nav, cart = ctx.navigation, ctx.cart
    vendor = nav.current_vendor
    if vendor is None:
        return PageView(title="Vendor", empty_text="No vendor selected.")

    intro = format_vendor_label(vendor)
    intro.append(f"\n{vendor.address}", style="dim")
    if nav.active_voucher is not None:
        intro.append(f"\nVoucher: {nav.active_voucher.title}", style="green")
    intro.append("\n+/- change quantity · S live stream · C cart", style="dim")

    rows = []
    for product in products_for_vendor(ctx.catalog, vendor.id):
        entry = cart.find(product.id)
        label = Text(f"{product.name}  {format_currency(product.price)}")
        if entry is not None:
            label.append(f"  ×{entry.quantity}", style="bold green")
        rows.append(PageRow(label, product=product))
    return PageView(title=vendor.name, intro=intro, rows=rows, empty_text="No items listed.")


def render_cart(ctx: PageContext) -> PageView:
    cart = ctx.cart
    rows = [PageRow(format_cart_line(entry), product=entry.item) for entry in cart.items]
    intro = Text()
    if cart.items:
        intro.append(f"Subtotal {format_currency(cart.subtotal())}")
        if cart.guest_reward.active:
            intro.append("  Guest reward −5%", style="green")
        intro.append(f"\nTotal {format_currency(cart.total())}", style="bold")
        intro.append(f"\nPayment: {cart.payment_method.value} (M to switch) · +/- quantity · I note · X remove", style="dim")
    return PageView(
        title=ctx.content.get("cart-title", "Your Order"),
        intro=intro,
        rows=rows,
        empty_text=ctx.content.get("cart-empty", "Your cart is empty."),
    )


def render_hotel_villa(ctx: PageContext) -> PageView:
    vendor = ctx.navigation.current_vendor
    if vendor is None:
        return PageView(title="Stay", empty_text="No property selected.")
    cart = ctx.cart
    intro = format_vendor_label(vendor)
    intro.append(f"\n{vendor.address}", style="dim")
    if cart.guest_reward.active and cart.guest_reward.expiry is not None:
        intro.append(f"\nGuest reward active until {cart.guest_reward.expiry:%Y-%m-%d %H:%M} UTC", style="green")
    rows = [PageRow(_text("Confirm visit (unlock 5% guest reward)"), cart.activate_guest_reward)]
    return PageView(title=vendor.name, intro=intro, rows=rows)


def render_destination(ctx: PageContext) -> PageView:
    destination = ctx.navigation.current_destination
    if destination is None:
        return PageView(title="Destination", empty_text="No destination selected.")
    intro = Text(f"{destination.category}  ★{destination.rating:.1f}\n", style="dim")
    intro.append(destination.bio)
    return PageView(title=destination.name, intro=intro)


def render_reviews(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    vehicle = nav.current_vehicle_for_reviews
    if vehicle is None:
        return PageView(title="Reviews", empty_text="No vehicle selected.")
    intro = Text(f"{vehicle.name} · {vehicle.plate}  ★{vehicle.rating:.1f}")
    rows = [PageRow(_text(f"Driver profile: {vehicle.driver}"), lambda: nav.select_driver_for_profile(vehicle))]
    return PageView(title="Reviews", intro=intro, rows=rows)


def render_driver_profile(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    driver = nav.current_driver_for_profile
    if driver is None:
        return PageView(title="Driver", empty_text="No driver selected.")
    image_url = f"https://picsum.photos/seed/{driver.id}/400/400"
    rows = [PageRow(_text("View profile photo"), lambda: nav.open_profile_image_modal(image_url))]
    return PageView(title=driver.driver, intro=Text(f"{driver.name} · {driver.plate}"), rows=rows)


def render_live_stream(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    vendor = nav.current_vendor
    if vendor is None:
        return PageView(title="Live", empty_text="Nothing streaming.")
    intro = Text(f"● LIVE  {vendor.name}", style="bold red")
    if nav.active_voucher is not None:
        intro.append(f"\n{nav.active_voucher.title}: {format_currency(nav.active_voucher.discount_amount)} off each item", style="green")
    rows = [PageRow(_text("Order from this vendor"), lambda: nav.select_vendor(vendor))]
    return PageView(title="Live Stream", intro=intro, rows=rows)


def render_profile(ctx: PageContext) -> PageView:
    session = ctx.session
    intro = Text()
    intro.append(f"Location: {session.location or '-'}\n")
    intro.append(f"WhatsApp: {session.phone_number or '-'}\n")
    intro.append(f"Language: {session.language.value if session.language else '-'}")
    if session.user is not None:
        intro.append(f"\nSigned in as {session.user.email}", style="bold")
        rows = [PageRow(_text("Sign out"), ctx.sign_out)]
    else:
        rows = [
            PageRow(_text("Sign in"), lambda: ctx.open_auth("sign_in")),
            PageRow(_text("Create account"), lambda: ctx.open_auth("sign_up")),
        ]
    rows.append(PageRow(_text("Change location"), session.open_location_modal))
    return PageView(title="Profile", intro=intro, rows=rows)


def render_restaurant_auth(ctx: PageContext) -> PageView:
    rows = [
        PageRow(_text("Restaurant sign in"), lambda: ctx.open_auth("sign_in")),
        PageRow(_text("Register restaurant"), lambda: ctx.open_auth("sign_up")),
    ]
    return PageView(title="Restaurant Portal", rows=rows)


def render_restaurant_dashboard(ctx: PageContext) -> PageView:
    if ctx.session.user is None:
        return render_restaurant_auth(ctx)
    return PageView(title="Restaurant Dashboard", intro=Text(f"Welcome back, {ctx.session.user.name or ctx.session.user.email}."))


def render_chat(ctx: PageContext) -> PageView:
    return PageView(title="Chat", empty_text="No conversations yet.")


def render_promo_videos(ctx: PageContext) -> PageView:
    nav = ctx.navigation
    voucher = ctx.catalog.vouchers[0] if ctx.catalog.vouchers else None
    rows = [
        PageRow(_text(f"Watch {v.name} live"), lambda v=v: nav.navigate_to_live_stream(v, voucher))
        for v in food_vendors(ctx.catalog)
    ]
    return PageView(title="Promo Videos", rows=rows)


PAGE_RENDERERS: dict[Page, Callable[[PageContext], PageView]] = {
    Page.HOME: render_home,
    Page.FOOD: render_food,
    Page.CART: render_cart,
    Page.CHAT: render_chat,
    Page.FOOD_DIRECTORY: render_food_directory,
    Page.VENDOR: render_vendor,
    Page.PROFILE: render_profile,
    Page.REVIEWS: render_reviews,
    Page.RESTAURANT_DASHBOARD: render_restaurant_dashboard,
    Page.RESTAURANT_AUTH: render_restaurant_auth,
    Page.PROMO_VIDEOS: render_promo_videos,
    Page.HOTEL_VILLA_DETAIL: render_hotel_villa,
    Page.DESTINATION_DETAIL: render_destination,
    Page.DRIVER_PROFILE: render_driver_profile,
    Page.LIVE_STREAM: render_live_stream,
}


def render_page(ctx: PageContext) -> PageView:
    """Landing until initialized; afterwards the current page, Home as fallback."""
    if not ctx.session.initialized:
        return render_landing(ctx)
    renderer = PAGE_RENDERERS.get(ctx.navigation.current_page, render_home)
    return renderer(ctx)


def toggle_payment_method(cart: CartState) -> None:
    if cart.payment_method is PaymentMethod.CASH:
        cart.set_payment_method(PaymentMethod.TRANSFER)
    else:
        cart.set_payment_method(PaymentMethod.CASH)
