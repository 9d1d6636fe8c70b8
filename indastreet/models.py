"""Domain models for the IndaStreet client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Page(str, Enum):
    """Every screen the shell can render."""

    HOME = "HOME"
    FOOD = "FOOD"
    CART = "CART"
    CHAT = "CHAT"
    FOOD_DIRECTORY = "FOOD_DIRECTORY"
    LANDING = "LANDING"
    VENDOR = "VENDOR"
    PROFILE = "PROFILE"
    REVIEWS = "REVIEWS"
    RESTAURANT_DASHBOARD = "RESTAURANT_DASHBOARD"
    RESTAURANT_AUTH = "RESTAURANT_AUTH"
    PROMO_VIDEOS = "PROMO_VIDEOS"
    HOTEL_VILLA_DETAIL = "HOTEL_VILLA_DETAIL"
    DESTINATION_DETAIL = "DESTINATION_DETAIL"
    DRIVER_PROFILE = "DRIVER_PROFILE"
    LIVE_STREAM = "LIVE_STREAM"


DEFAULT_PAGE = Page.HOME


def resolve_page(value: Any) -> Page:
    """Map any value to a Page, falling back to the default page."""
    if isinstance(value, Page):
        return value
    try:
        return Page(str(value).upper())
    except ValueError:
        return DEFAULT_PAGE


class Language(str, Enum):
    EN = "en"
    ID = "id"


class VendorType(str, Enum):
    FOOD = "food"
    SHOP = "shop"
    RENTAL = "rental"
    BUSINESS = "business"
    MASSAGE = "massage"
    HOTEL = "hotel"
    VILLA = "villa"


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"


class RewardStatus(str, Enum):
    NONE = "none"
    ACTIVE = "active"


@dataclass(frozen=True)
class Vendor:
    """A business listed in the marketplace."""

    id: str
    name: str
    type: VendorType
    address: str = ""
    rating: float = 0.0
    distance: float = 0.0


@dataclass(frozen=True)
class Destination:
    id: str
    name: str
    category: str
    bio: str = ""
    rating: float = 0.0


@dataclass(frozen=True)
class Vehicle:
    id: str
    name: str
    driver: str
    plate: str = ""
    rating: float = 0.0


@dataclass(frozen=True)
class MenuItem:
    """A food menu entry sold by a vendor."""

    id: str
    name: str
    price: int
    vendor_id: str
    category: str = ""
    description: str = ""


@dataclass(frozen=True)
class ShopItem:
    """A retail product sold by a shop vendor."""

    id: str
    name: str
    price: int
    vendor_id: str
    description: str = ""


Product = MenuItem | ShopItem


@dataclass(frozen=True)
class Voucher:
    """A per-unit discount in IDR."""

    id: str
    title: str
    discount_amount: int
    description: str = ""


@dataclass(frozen=True)
class CartItem:
    """A cart line; replaced rather than mutated on update."""

    item: Product
    quantity: int
    applied_voucher: Voucher | None = None
    special_instructions: str = ""


@dataclass
class GuestReward:
    status: RewardStatus = RewardStatus.NONE
    expiry: datetime | None = None

    @property
    def active(self) -> bool:
        return self.status is RewardStatus.ACTIVE


@dataclass(frozen=True)
class Notification:
    """A toast shown at the top of the screen."""

    message: str
    sender: str
    avatar: str = ""


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str
    name: str | None = None


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RemoteSession:
    """Reference to a session held by the identity service."""

    id: str
    user_id: str


@dataclass(frozen=True)
class UserIdentity:
    id: str
    email: str
    name: str = ""


@dataclass(frozen=True)
class AuthResult:
    session: RemoteSession
    user: UserIdentity


@dataclass(frozen=True)
class PageLayout:
    """Cross-cutting layout flags for one page."""

    padded: bool
    show_header: bool
    show_footer: bool
    app_background: bool


@dataclass
class Catalog:
    """Static marketplace listings backing the pages."""

    vendors: list[Vendor] = field(default_factory=list)
    menu_by_vendor: dict[str, list[Product]] = field(default_factory=dict)
    destinations: list[Destination] = field(default_factory=list)
    vehicles: list[Vehicle] = field(default_factory=list)
    vouchers: list[Voucher] = field(default_factory=list)
