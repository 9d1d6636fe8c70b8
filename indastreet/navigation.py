"""Current page, selections, toast and profile image modal state."""

from __future__ import annotations

from indastreet.config import NOTIFICATION_DISPLAY_SECONDS, PROFILE_IMAGE_CLEAR_DELAY_SECONDS
from indastreet.constant import DEFAULT_VENDOR_PAGE, VENDOR_ROUTES
from indastreet.logs import get_logger
from indastreet.models import Destination, Notification, Page, Product, Vehicle, Vendor, VendorType, Voucher
from indastreet.scheduling import ScheduledTask, Scheduler
from indastreet.store import StateStore

log = get_logger(__name__)


def page_for_vendor(vendor_type: VendorType) -> Page:
    """Route a vendor category to its detail page."""
    return VENDOR_ROUTES.get(vendor_type, DEFAULT_VENDOR_PAGE)


class NavigationState(StateStore):
    """Navigation state machine with timer-owned toast and modal fields."""

    def __init__(self, scheduler: Scheduler, initial_page: Page = Page.LANDING) -> None:
        super().__init__()
        self._scheduler = scheduler
        self.current_page = initial_page
        self.scroll_offset = 0
        self.current_vendor: Vendor | None = None
        self.current_destination: Destination | None = None
        self.current_vehicle_for_reviews: Vehicle | None = None
        self.current_driver_for_profile: Vehicle | None = None
        self.active_voucher: Voucher | None = None
        self.notification: Notification | None = None
        self.is_profile_image_modal_open = False
        self.profile_image_modal_url: str | None = None
        self._hide_task: ScheduledTask | None = None
        self._clear_url_task: ScheduledTask | None = None

    def navigate_to(self, page: Page) -> None:
        self._set_page(page)
        self._notify()

    def select_vendor(self, vendor: Vendor) -> None:
        if self.current_vendor is None or self.current_vendor.id != vendor.id:
            # A live-stream voucher only holds at the vendor that issued it.
            self.active_voucher = None
        self.current_vendor = vendor
        self._set_page(page_for_vendor(vendor.type))
        self._notify()

    def select_destination(self, destination: Destination) -> None:
        self.current_destination = destination
        self._set_page(Page.DESTINATION_DETAIL)
        self._notify()

    def select_vehicle_for_reviews(self, vehicle: Vehicle) -> None:
        self.current_vehicle_for_reviews = vehicle
        self._set_page(Page.REVIEWS)
        self._notify()

    def select_driver_for_profile(self, driver: Vehicle) -> None:
        self.current_driver_for_profile = driver
        self._set_page(Page.DRIVER_PROFILE)
        self._notify()

    def navigate_to_live_stream(self, vendor: Vendor, voucher: Voucher | None = None) -> None:
        self.current_vendor = vendor
        self.active_voucher = voucher
        self._set_page(Page.LIVE_STREAM)
        self._notify()

    def voucher_for(self, product: Product) -> Voucher | None:
        """The live-stream voucher when ``product`` belongs to the vendor on screen."""
        vendor = self.current_vendor
        if self.active_voucher is None or vendor is None or product.vendor_id != vendor.id:
            return None
        return self.active_voucher

    def show_notification(self, notification: Notification) -> None:
        """Replace the current toast and hide it after the display window."""
        self._cancel_hide()
        self.notification = notification
        self._hide_task = self._scheduler.call_later(NOTIFICATION_DISPLAY_SECONDS, self.hide_notification)
        log.info("notification_shown sender=%r", notification.sender)
        self._notify()

    def hide_notification(self) -> None:
        self._cancel_hide()
        if self.notification is None:
            return
        self.notification = None
        self._notify()

    def open_profile_image_modal(self, url: str) -> None:
        if self._clear_url_task is not None:
            self._clear_url_task.cancel()
            self._clear_url_task = None
        self.profile_image_modal_url = url
        self.is_profile_image_modal_open = True
        self._notify()

    def close_profile_image_modal(self) -> None:
        self.is_profile_image_modal_open = False
        if self._clear_url_task is not None:
            self._clear_url_task.cancel()
        # Url outlives the close transition so the image does not vanish mid-fade.
        self._clear_url_task = self._scheduler.call_later(PROFILE_IMAGE_CLEAR_DELAY_SECONDS, self._clear_profile_image_url)
        self._notify()

    def close(self) -> None:
        """Cancel every pending timer owned by this store."""
        self._cancel_hide()
        if self._clear_url_task is not None:
            self._clear_url_task.cancel()
            self._clear_url_task = None

    def _set_page(self, page: Page) -> None:
        if page is not self.current_page:
            log.info("navigate from=%s to=%s", self.current_page.value, page.value)
        self.current_page = page
        self.scroll_offset = 0

    def _cancel_hide(self) -> None:
        if self._hide_task is not None:
            self._hide_task.cancel()
            self._hide_task = None

    def _clear_profile_image_url(self) -> None:
        self._clear_url_task = None
        if self.is_profile_image_modal_open:
            return
        self.profile_image_modal_url = None
        self._notify()
