"""Editable static content, routing and catalog configuration."""

from __future__ import annotations

from indastreet.models import Page, VendorType

CONTENT_TEXT: dict[str, str] = {
    "landing-tagline": "Your gateway to the vibrant streets of Indonesia.",
    "landing-language-prompt": "Please select your language:",
    "home-tagline": "At Your Fingertips",
    "rental-tagline": "Vehicle Rentals & Sales",
    "food-title": "Street Food",
    "cart-title": "Your Order",
    "cart-empty": "Your cart is empty.",
}

# Pages where a cart may survive; leaving them empties the cart.
SHOPPING_PAGES: frozenset[Page] = frozenset({Page.FOOD, Page.VENDOR, Page.CART})

NO_PADDING_PAGES: frozenset[Page] = frozenset({Page.HOME, Page.CHAT, Page.VENDOR, Page.FOOD, Page.PROMO_VIDEOS})
PAGES_WITHOUT_FOOTER: frozenset[Page] = frozenset({Page.CHAT, Page.FOOD, Page.PROMO_VIDEOS})
PAGES_WITHOUT_HEADER: frozenset[Page] = frozenset({Page.FOOD, Page.PROMO_VIDEOS})
PAGES_WITH_APP_BACKGROUND: frozenset[Page] = frozenset({Page.HOME})

# Vendor categories with a dedicated detail page; everything else opens VENDOR.
VENDOR_ROUTES: dict[VendorType, Page] = {
    VendorType.HOTEL: Page.HOTEL_VILLA_DETAIL,
    VendorType.VILLA: Page.HOTEL_VILLA_DETAIL,
}
DEFAULT_VENDOR_PAGE = Page.VENDOR

REWARD_UNLOCKED_NOTIFICATION: dict[str, str] = {
    "message": "You've unlocked a 5% discount on all rides & food orders for 48 hours!",
    "sender": "IndaStreet VIP",
    "avatar": "https://picsum.photos/seed/indastreet_vip/100/100",
}

REWARD_EXPIRED_NOTIFICATION: dict[str, str] = {
    "message": "Your 5% Guest Reward has expired. Contact another hotel to reactivate!",
    "sender": "IndaStreet Rewards",
    "avatar": "https://picsum.photos/seed/indastreet_logo/100/100",
}

WIZARD_MESSAGES: dict[str, str] = {
    "location_required": "Please enter a location.",
    "phone_invalid": "Please enter a valid WhatsApp number (at least 9 digits).",
    "otp_incorrect": "Incorrect verification code. Please try again.",
    "geolocation_failed": "Could not get location. Please enable location services or enter it manually.",
    "geolocation_unsupported": "Geolocation is not supported on this device.",
    "geocode_not_found": "No results found for your location.",
    "geocoder_not_ready": "Mapping service not loaded yet.",
    "geocoder_failed": "Geocoder failed due to: {status}",
}

VENDORS: list[dict[str, object]] = [
    {"id": "warung_bu_sri", "name": "Warung Bu Sri", "type": "food", "address": "Jl. Malioboro 12, Yogyakarta", "rating": 4.7, "distance": 0.8},
    {"id": "sate_pak_man", "name": "Sate Pak Man", "type": "food", "address": "Jl. Prawirotaman 4, Yogyakarta", "rating": 4.5, "distance": 1.4},
    {"id": "kopi_jalanan", "name": "Kopi Jalanan", "type": "shop", "address": "Jl. Tirtodipuran 21, Yogyakarta", "rating": 4.3, "distance": 2.1},
    {"id": "hotel_kencana", "name": "Hotel Kencana", "type": "hotel", "address": "Jl. Sosrowijayan 7, Yogyakarta", "rating": 4.6, "distance": 1.1},
    {"id": "villa_sawah", "name": "Villa Sawah", "type": "villa", "address": "Ubud, Bali", "rating": 4.9, "distance": 12.5},
    {"id": "pijat_sehat", "name": "Pijat Sehat", "type": "massage", "address": "Jl. Kaliurang 3, Sleman", "rating": 4.4, "distance": 5.0},
]

MENU_ITEMS: list[dict[str, object]] = [
    {"id": "nasi_goreng", "name": "Nasi Goreng", "price": 25000, "vendor_id": "warung_bu_sri", "category": "Food"},
    {"id": "mie_ayam", "name": "Mie Ayam", "price": 18000, "vendor_id": "warung_bu_sri", "category": "Food"},
    {"id": "es_teh", "name": "Es Teh Manis", "price": 5000, "vendor_id": "warung_bu_sri", "category": "Drink"},
    {"id": "sate_ayam", "name": "Sate Ayam (10 tusuk)", "price": 30000, "vendor_id": "sate_pak_man", "category": "Food"},
    {"id": "sate_kambing", "name": "Sate Kambing", "price": 40000, "vendor_id": "sate_pak_man", "category": "Food"},
    {"id": "lontong", "name": "Lontong", "price": 5000, "vendor_id": "sate_pak_man", "category": "Food"},
]

SHOP_ITEMS: list[dict[str, object]] = [
    {"id": "kopi_tubruk", "name": "Kopi Tubruk 250g", "price": 45000, "vendor_id": "kopi_jalanan"},
    {"id": "kopi_luwak", "name": "Kopi Luwak 100g", "price": 150000, "vendor_id": "kopi_jalanan"},
]

DESTINATIONS: list[dict[str, object]] = [
    {"id": "borobudur", "name": "Borobudur", "category": "Temples & Historical Sites", "bio": "Ninth-century Mahayana temple.", "rating": 4.8},
    {"id": "merapi", "name": "Mount Merapi", "category": "Nature & Outdoors", "bio": "Active volcano with jeep tours.", "rating": 4.6},
]

VEHICLES: list[dict[str, object]] = [
    {"id": "bike_01", "name": "Honda Vario", "driver": "Budi", "plate": "AB 1234 XY", "rating": 4.9},
    {"id": "car_01", "name": "Toyota Avanza", "driver": "Agus", "plate": "AB 5678 ZZ", "rating": 4.7},
]

VOUCHERS: list[dict[str, object]] = [
    {"id": "live_10k", "title": "Live Stream 10K Off", "discount_amount": 10000, "description": "Valid on any menu item"},
]
