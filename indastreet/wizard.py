"""Two-step location + phone → one-time code verification flow."""

from __future__ import annotations

import random
import re
from enum import Enum

from indastreet.config import MIN_PHONE_DIGITS, OTP_LENGTH
from indastreet.constant import WIZARD_MESSAGES
from indastreet.errors import (
    ExternalServiceError,
    GeocodeNotFound,
    GeocoderError,
    GeolocationError,
    GeolocationUnsupported,
)
from indastreet.geo import Geocoder, Geolocator, NullAutocomplete, PlacesAutocomplete
from indastreet.logs import get_logger
from indastreet.session import SessionState
from indastreet.store import StateStore

log = get_logger(__name__)


class WizardStep(str, Enum):
    LOCATION = "location"
    OTP = "otp"


def generate_code(rng: random.Random) -> str:
    """Uniform 4-digit code in 1000-9999."""
    return str(rng.randint(1000, 9999))


class LocationWizard(StateStore):
    """
    Gatekeeper for app access.

    ``submit_location`` validates the typed location and phone and only then
    issues a mock code; ``verify_code`` commits location and phone to the
    session on an exact match. Device lookups are asynchronous and their
    results are dropped if the wizard moved on while they were in flight.
    """

    def __init__(
        self,
        session: SessionState,
        geolocator: Geolocator,
        geocoder: Geocoder,
        autocomplete: PlacesAutocomplete | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._geolocator = geolocator
        self._geocoder = geocoder
        self._autocomplete = autocomplete or NullAutocomplete()
        self._rng = rng or random.SystemRandom()
        self._generation = 0
        self.step = WizardStep.LOCATION
        self.location_input = ""
        self.phone_input = ""
        self.otp_input = ""
        self.generated_code = ""
        self.error = ""
        self.is_geocoding = False
        self.suggestions: list[str] = []

    @property
    def can_autocomplete(self) -> bool:
        return self._autocomplete.ready

    def reset(self) -> None:
        """Start over at the location step; typed location and phone are kept."""
        self._generation += 1
        self.step = WizardStep.LOCATION
        self.error = ""
        self.otp_input = ""
        self.is_geocoding = False
        self._notify()

    def set_location_input(self, text: str) -> None:
        self.location_input = text
        self._notify()

    def set_phone_input(self, text: str) -> None:
        self.phone_input = re.sub(r"[^0-9]", "", text)
        self._notify()

    def set_otp_input(self, text: str) -> None:
        self.otp_input = re.sub(r"[^0-9]", "", text)[:OTP_LENGTH]
        self._notify()

    def submit_location(self) -> bool:
        if self.step is not WizardStep.LOCATION:
            return False
        if not self.location_input.strip():
            return self._fail(WIZARD_MESSAGES["location_required"])
        if not self.phone_input.strip() or len(self.phone_input) < MIN_PHONE_DIGITS:
            return self._fail(WIZARD_MESSAGES["phone_invalid"])

        self.error = ""
        self.generated_code = generate_code(self._rng)
        log.info("mock_otp_sent code=%s", self.generated_code)
        self._generation += 1
        self.step = WizardStep.OTP
        self.is_geocoding = False
        self._notify()
        return True

    def verify_code(self) -> bool:
        if self.step is not WizardStep.OTP:
            return False
        if self.otp_input != self.generated_code:
            return self._fail(WIZARD_MESSAGES["otp_incorrect"])

        self.error = ""
        log.info("otp_verified")
        self._session.confirm_location(self.location_input, self.phone_input)
        self.reset()
        return True

    def go_back(self) -> None:
        """Return to the location step, discarding the typed code."""
        if self.step is not WizardStep.OTP:
            return
        self._generation += 1
        self.step = WizardStep.LOCATION
        self.otp_input = ""
        self.error = ""
        self._notify()

    async def use_current_location(self) -> bool:
        if self.step is not WizardStep.LOCATION or self.is_geocoding:
            return False

        generation = self._generation
        self.is_geocoding = True
        self.error = ""
        self._notify()

        address: str | None = None
        error = ""
        try:
            coords = await self._geolocator.get_current_position()
            if not self._geocoder.ready:
                raise GeocoderError("NOT_LOADED")
            address = await self._geocoder.geocode(coords)
        except GeolocationUnsupported:
            error = WIZARD_MESSAGES["geolocation_unsupported"]
        except GeolocationError:
            error = WIZARD_MESSAGES["geolocation_failed"]
        except GeocodeNotFound:
            error = WIZARD_MESSAGES["geocode_not_found"]
        except GeocoderError as exc:
            if exc.status == "NOT_LOADED":
                error = WIZARD_MESSAGES["geocoder_not_ready"]
            else:
                error = WIZARD_MESSAGES["geocoder_failed"].format(status=exc.status)
        except ExternalServiceError:
            error = WIZARD_MESSAGES["geolocation_failed"]
        finally:
            # A lookup never leaves the wizard stuck in the locating state.
            if generation == self._generation:
                self.is_geocoding = False

        if generation != self._generation or self.step is not WizardStep.LOCATION:
            log.info("location_lookup_discarded")
            return False

        if address is None:
            log.info("location_lookup_failed error=%r", error)
            self.error = error
            self._notify()
            return False

        self.location_input = address
        self._notify()
        return True

    async def suggest_locations(self) -> list[str]:
        if not self._autocomplete.ready or self.step is not WizardStep.LOCATION:
            return []
        query = self.location_input
        try:
            suggestions = await self._autocomplete.suggest(query)
        except ExternalServiceError as exc:
            log.info("autocomplete_failed reason=%r", str(exc))
            suggestions = []
        if self.step is not WizardStep.LOCATION or self.location_input != query:
            return []
        self.suggestions = suggestions
        self._notify()
        return suggestions

    def choose_suggestion(self, address: str) -> None:
        if not address:
            return
        self.location_input = address
        self.suggestions = []
        self._notify()

    def _fail(self, message: str) -> bool:
        self.error = message
        self._notify()
        return False
