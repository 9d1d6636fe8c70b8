"""Device position, reverse geocoding and address autocomplete capabilities."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from indastreet.config import (
    COUNTRY_CODE,
    DEVICE_LATITUDE,
    DEVICE_LONGITUDE,
    GEOCODE_URL,
    GOOGLE_MAPS_API_KEY,
    HTTP_TIMEOUT_SECONDS,
    PLACES_AUTOCOMPLETE_URL,
)
from indastreet.errors import GeocodeNotFound, GeocoderError, GeolocationUnsupported
from indastreet.logs import get_logger
from indastreet.models import Coordinates

log = get_logger(__name__)


class Geolocator(Protocol):
    async def get_current_position(self) -> Coordinates: ...


class Geocoder(Protocol):
    @property
    def ready(self) -> bool: ...

    async def geocode(self, coords: Coordinates) -> str: ...


class PlacesAutocomplete(Protocol):
    @property
    def ready(self) -> bool: ...

    async def suggest(self, text: str) -> list[str]: ...


class StaticGeolocator:
    """Reports a fixed, configured position."""

    def __init__(self, coords: Coordinates) -> None:
        self._coords = coords

    async def get_current_position(self) -> Coordinates:
        return self._coords


class UnsupportedGeolocator:
    async def get_current_position(self) -> Coordinates:
        raise GeolocationUnsupported("Geolocation is not supported")


class NullGeocoder:
    """Stand-in while no mapping service is available."""

    @property
    def ready(self) -> bool:
        return False

    async def geocode(self, coords: Coordinates) -> str:
        raise GeocoderError("NOT_LOADED")


class NullAutocomplete:
    @property
    def ready(self) -> bool:
        return False

    async def suggest(self, text: str) -> list[str]:
        return []


class _GoogleMapsClient:
    def __init__(self, api_key: str, client: httpx.AsyncClient | None) -> None:
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(HTTP_TIMEOUT_SECONDS, connect=5.0))

    @property
    def ready(self) -> bool:
        return bool(self._api_key)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        if not self._api_key:
            raise GeocoderError("NOT_LOADED")
        try:
            resp = await self._client.get(url, params={**params, "key": self._api_key}, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise GeocoderError(f"UNREACHABLE ({exc})") from exc
        if resp.status_code != 200:
            raise GeocoderError(f"HTTP_{resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise GeocoderError("INVALID_RESPONSE") from exc
        if not isinstance(data, dict):
            raise GeocoderError("INVALID_RESPONSE")
        return data


class GoogleGeocoder(_GoogleMapsClient):
    """Reverse geocoding through the Google Geocoding API."""

    def __init__(self, api_key: str = GOOGLE_MAPS_API_KEY, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(api_key, client)

    async def geocode(self, coords: Coordinates) -> str:
        data = await self._get_json(GEOCODE_URL, {"latlng": f"{coords.latitude},{coords.longitude}"})
        status = data.get("status")
        if status == "ZERO_RESULTS":
            raise GeocodeNotFound("No results found")
        if status != "OK":
            log.info("geocode_failed status=%s error=%r", status, data.get("error_message"))
            raise GeocoderError(str(status))
        results = data.get("results") or []
        if not results or not results[0].get("formatted_address"):
            raise GeocodeNotFound("No results found")
        return str(results[0]["formatted_address"])


class GooglePlacesAutocomplete(_GoogleMapsClient):
    """Address suggestions restricted to one country."""

    def __init__(
        self,
        api_key: str = GOOGLE_MAPS_API_KEY,
        country: str = COUNTRY_CODE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(api_key, client)
        self._country = country

    async def suggest(self, text: str) -> list[str]:
        query = text.strip()
        if not query:
            return []
        data = await self._get_json(
            PLACES_AUTOCOMPLETE_URL,
            {"input": query, "types": "geocode", "components": f"country:{self._country}"},
        )
        status = data.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            raise GeocoderError(str(status))
        return [str(p["description"]) for p in data.get("predictions", []) if p.get("description")]


def build_geolocator() -> Geolocator:
    if DEVICE_LATITUDE is None or DEVICE_LONGITUDE is None:
        return UnsupportedGeolocator()
    return StaticGeolocator(Coordinates(DEVICE_LATITUDE, DEVICE_LONGITUDE))


def build_geocoder() -> Geocoder:
    if not GOOGLE_MAPS_API_KEY:
        log.warning("GOOGLE_MAPS_API_KEY is not set; mapping features are disabled.")
        return NullGeocoder()
    return GoogleGeocoder()


def build_autocomplete() -> PlacesAutocomplete:
    if not GOOGLE_MAPS_API_KEY:
        return NullAutocomplete()
    return GooglePlacesAutocomplete()
