"""Shopping cart, payment method and guest reward state."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable

from indastreet.config import (
    GUEST_REWARD_HOURS,
    GUEST_REWARD_MULTIPLIER,
    GUEST_REWARD_POLL_SECONDS,
    MAX_SPECIAL_INSTRUCTIONS,
)
from indastreet.constant import REWARD_EXPIRED_NOTIFICATION, REWARD_UNLOCKED_NOTIFICATION
from indastreet.logs import get_logger
from indastreet.models import CartItem, GuestReward, Notification, PaymentMethod, Product, RewardStatus, Voucher
from indastreet.scheduling import ScheduledTask, Scheduler, utc_now
from indastreet.store import StateStore

log = get_logger(__name__)


def line_total(entry: CartItem) -> float:
    """Unit price less the voucher discount (never negative), times quantity."""
    unit_price = entry.item.price
    if entry.applied_voucher is not None:
        unit_price = max(0, unit_price - entry.applied_voucher.discount_amount)
    return unit_price * entry.quantity


class CartState(StateStore):
    """
    Cart lines keyed by product id plus the time-bound guest reward.

    ``notify`` is called with the reward's unlock and expiry toasts; the app
    wires it to ``NavigationState.show_notification``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        notify: Callable[[Notification], None] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__()
        self._scheduler = scheduler
        self._show = notify
        self._clock = clock
        self.items: list[CartItem] = []
        self.guest_reward = GuestReward()
        self.payment_method = PaymentMethod.CASH
        self._expiry_poll: ScheduledTask | None = None

    def __len__(self) -> int:
        return len(self.items)

    def find(self, item_id: str) -> CartItem | None:
        for entry in self.items:
            if entry.item.id == item_id:
                return entry
        return None

    def update_quantity(self, item: Product, quantity: int, voucher: Voucher | None = None) -> None:
        if quantity <= 0:
            self.remove(item.id)
            return

        existing = self.find(item.id)
        if existing is None:
            self.items = [*self.items, CartItem(item=item, quantity=quantity, applied_voucher=voucher)]
        else:
            updated = replace(existing, quantity=quantity, applied_voucher=voucher or existing.applied_voucher)
            self.items = [updated if entry is existing else entry for entry in self.items]
        self._notify()

    def remove(self, item_id: str) -> None:
        remaining = [entry for entry in self.items if entry.item.id != item_id]
        if len(remaining) == len(self.items):
            return
        self.items = remaining
        self._notify()

    def clear(self) -> None:
        had_items = bool(self.items)
        self.items = []
        if had_items:
            log.info("cart_cleared")
        self._notify()

    def set_instructions(self, item_id: str, text: str) -> None:
        existing = self.find(item_id)
        if existing is None:
            return
        cleaned = text.strip()[:MAX_SPECIAL_INSTRUCTIONS]
        self.items = [replace(entry, special_instructions=cleaned) if entry is existing else entry for entry in self.items]
        self._notify()

    def set_payment_method(self, method: PaymentMethod) -> None:
        self.payment_method = method
        self._notify()

    def item_count(self) -> int:
        return sum(entry.quantity for entry in self.items)

    def subtotal(self) -> float:
        return sum(line_total(entry) for entry in self.items)

    def total(self) -> float:
        subtotal = self.subtotal()
        if self.guest_reward.active:
            return subtotal * GUEST_REWARD_MULTIPLIER
        return subtotal

    def activate_guest_reward(self) -> None:
        self.guest_reward = GuestReward(
            status=RewardStatus.ACTIVE,
            expiry=self._clock() + timedelta(hours=GUEST_REWARD_HOURS),
        )
        if self._expiry_poll is None:
            self._expiry_poll = self._scheduler.call_every(GUEST_REWARD_POLL_SECONDS, self.check_guest_reward_expiry)
        log.info("guest_reward_activated expiry=%s", self.guest_reward.expiry.isoformat())
        self._emit_notification(REWARD_UNLOCKED_NOTIFICATION)
        self._notify()

    def check_guest_reward_expiry(self) -> None:
        reward = self.guest_reward
        if not reward.active or reward.expiry is None:
            self._stop_expiry_poll()
            return
        if self._clock() <= reward.expiry:
            return

        self.guest_reward = GuestReward()
        self._stop_expiry_poll()
        log.info("guest_reward_expired")
        self._emit_notification(REWARD_EXPIRED_NOTIFICATION)
        self._notify()

    def close(self) -> None:
        self._stop_expiry_poll()

    def _stop_expiry_poll(self) -> None:
        if self._expiry_poll is not None:
            self._expiry_poll.cancel()
            self._expiry_poll = None

    def _emit_notification(self, raw: dict[str, str]) -> None:
        if self._show is None:
            return
        self._show(Notification(**raw))
