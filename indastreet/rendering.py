"""Rendering helpers for prices, vendor tags, cart lines and toasts."""

from __future__ import annotations

from rich.text import Text

from indastreet.cart import line_total
from indastreet.models import CartItem, Notification, Vendor, VendorType

_BADGE_STYLES: dict[VendorType, str] = {
    VendorType.FOOD: "bold #0b1f0f on #5fbf72",
    VendorType.SHOP: "bold #ffffff on #2f6db5",
    VendorType.HOTEL: "bold #ffffff on #b23a48",
    VendorType.VILLA: "bold #ffffff on #8a4fbf",
}


def format_currency(price: float) -> str:
    """Compact IDR price: Rp25K, Rp1,5 Jt, Rp500."""
    if price >= 1_000_000:
        return f"Rp{_compact(price / 1_000_000)} Jt"
    if price >= 1000:
        return f"Rp{_compact(price / 1000)}K"
    return f"Rp{price:,.0f}".replace(",", ".")


def _compact(value: float) -> str:
    if value % 1 == 0:
        return str(int(value))
    return f"{value:.1f}".replace(".", ",")


def badge_style(vendor_type: VendorType) -> str:
    """Return a consistent badge style for vendor categories."""
    return _BADGE_STYLES.get(vendor_type, "bold #1a1a1a on #d9a441")


def format_vendor_label(vendor: Vendor) -> Text:
    text = Text()
    text.append(f" {vendor.type.value.upper()} ", style=badge_style(vendor.type))
    text.append(f" {vendor.name}")
    text.append(f"  ★{vendor.rating:.1f}  {vendor.distance:.1f} km", style="dim")
    return text


def format_cart_line(entry: CartItem) -> Text:
    text = Text()
    text.append(f"{entry.quantity} × {entry.item.name}")
    text.append(f"  {format_currency(line_total(entry))}", style="bold")
    if entry.applied_voucher is not None:
        text.append(f"  [-{format_currency(entry.applied_voucher.discount_amount)}/unit]", style="green")
    if entry.special_instructions:
        text.append(f"\n      “{entry.special_instructions}”", style="dim")
    return text


def format_notification(notification: Notification | None) -> Text:
    if notification is None:
        return Text()
    text = Text()
    text.append(notification.sender, style="bold")
    text.append(f"  {notification.message}")
    text.append("   (n to dismiss)", style="dim")
    return text
