"""Static catalog data built from the editable configuration."""

from __future__ import annotations

from indastreet.constant import DESTINATIONS, MENU_ITEMS, SHOP_ITEMS, VEHICLES, VENDORS, VOUCHERS
from indastreet.models import Catalog, Destination, MenuItem, Product, ShopItem, Vehicle, Vendor, VendorType, Voucher


def _build_vendor(raw: dict[str, object]) -> Vendor:
    return Vendor(
        id=str(raw["id"]),
        name=str(raw["name"]),
        type=VendorType(str(raw["type"])),
        address=str(raw.get("address", "")),
        rating=float(raw.get("rating", 0.0)),  # type: ignore[arg-type]
        distance=float(raw.get("distance", 0.0)),  # type: ignore[arg-type]
    )


def build_catalog() -> Catalog:
    """Build the default marketplace catalog."""
    menu_by_vendor: dict[str, list[Product]] = {}
    for raw in MENU_ITEMS:
        item = MenuItem(
            id=str(raw["id"]),
            name=str(raw["name"]),
            price=int(raw["price"]),  # type: ignore[call-overload]
            vendor_id=str(raw["vendor_id"]),
            category=str(raw.get("category", "")),
        )
        menu_by_vendor.setdefault(item.vendor_id, []).append(item)
    for raw in SHOP_ITEMS:
        shop_item = ShopItem(
            id=str(raw["id"]),
            name=str(raw["name"]),
            price=int(raw["price"]),  # type: ignore[call-overload]
            vendor_id=str(raw["vendor_id"]),
        )
        menu_by_vendor.setdefault(shop_item.vendor_id, []).append(shop_item)

    return Catalog(
        vendors=[_build_vendor(raw) for raw in VENDORS],
        menu_by_vendor=menu_by_vendor,
        destinations=[
            Destination(
                id=str(raw["id"]),
                name=str(raw["name"]),
                category=str(raw["category"]),
                bio=str(raw.get("bio", "")),
                rating=float(raw.get("rating", 0.0)),  # type: ignore[arg-type]
            )
            for raw in DESTINATIONS
        ],
        vehicles=[
            Vehicle(
                id=str(raw["id"]),
                name=str(raw["name"]),
                driver=str(raw["driver"]),
                plate=str(raw.get("plate", "")),
                rating=float(raw.get("rating", 0.0)),  # type: ignore[arg-type]
            )
            for raw in VEHICLES
        ],
        vouchers=[
            Voucher(
                id=str(raw["id"]),
                title=str(raw["title"]),
                discount_amount=int(raw["discount_amount"]),  # type: ignore[call-overload]
                description=str(raw.get("description", "")),
            )
            for raw in VOUCHERS
        ],
    )


def food_vendors(catalog: Catalog) -> list[Vendor]:
    """Vendors shown on the street food listing."""
    return [vendor for vendor in catalog.vendors if vendor.type in {VendorType.FOOD, VendorType.SHOP}]


def products_for_vendor(catalog: Catalog, vendor_id: str) -> list[Product]:
    return list(catalog.menu_by_vendor.get(vendor_id, []))
