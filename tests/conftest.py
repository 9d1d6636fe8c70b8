from __future__ import annotations

import asyncio

import pytest

from indastreet.cart import CartState
from indastreet.identity import InMemoryIdentityService
from indastreet.models import MenuItem, Notification, Vendor, VendorType, Voucher
from indastreet.navigation import NavigationState
from indastreet.scheduling import ManualScheduler
from indastreet.session import SessionState


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def navigation(scheduler: ManualScheduler) -> NavigationState:
    return NavigationState(scheduler)


@pytest.fixture
def notifications() -> list[Notification]:
    return []


@pytest.fixture
def cart(scheduler: ManualScheduler, notifications: list[Notification]) -> CartState:
    return CartState(scheduler, notify=notifications.append, clock=scheduler.now)


@pytest.fixture
def identity() -> InMemoryIdentityService:
    service = InMemoryIdentityService()
    asyncio.run(service.create_identity("user_1", "ayu@example.com", "rahasia123", "Ayu"))
    return service


@pytest.fixture
def session(identity: InMemoryIdentityService) -> SessionState:
    return SessionState(identity)


@pytest.fixture
def nasi() -> MenuItem:
    return MenuItem(id="nasi_goreng", name="Nasi Goreng", price=100, vendor_id="warung")


@pytest.fixture
def es_teh() -> MenuItem:
    return MenuItem(id="es_teh", name="Es Teh", price=50, vendor_id="warung")


@pytest.fixture
def voucher_20() -> Voucher:
    return Voucher(id="v20", title="20 off", discount_amount=20)


@pytest.fixture
def food_vendor() -> Vendor:
    return Vendor(id="warung", name="Warung Bu Sri", type=VendorType.FOOD)
