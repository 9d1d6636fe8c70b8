"""Errors raised by the external service seams."""

from __future__ import annotations


class ExternalServiceError(Exception):
    """Base for failures of identity, geolocation and mapping services."""


class IdentityError(ExternalServiceError):
    """The identity service rejected or failed a request."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class GeolocationError(ExternalServiceError):
    """Device position could not be read (unsupported or permission denied)."""


class GeolocationUnsupported(GeolocationError):
    """The device has no position source at all."""


class GeocodeNotFound(ExternalServiceError):
    """Reverse geocoding returned no address for the coordinates."""


class GeocoderError(ExternalServiceError):
    """The mapping service failed or is not loaded."""

    def __init__(self, status: str) -> None:
        super().__init__(status)
        self.status = status
