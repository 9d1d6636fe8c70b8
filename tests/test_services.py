from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from indastreet.errors import GeocodeNotFound, GeocoderError, IdentityError
from indastreet.geo import GoogleGeocoder, GooglePlacesAutocomplete
from indastreet.identity import AppwriteIdentityService, InMemoryIdentityService
from indastreet.models import Coordinates
from indastreet.session import SessionState

MONAS = Coordinates(-6.1754, 106.8272)


def mock_client(handler, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), **kwargs)


def test_geocoder_returns_first_formatted_address():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"status": "OK", "results": [{"formatted_address": "Gambir, Jakarta"}, {}]})

    geocoder = GoogleGeocoder(api_key="k", client=mock_client(handler))
    assert asyncio.run(geocoder.geocode(MONAS)) == "Gambir, Jakarta"
    assert seen["latlng"] == "-6.1754,106.8272"
    assert seen["key"] == "k"


@pytest.mark.parametrize(
    "payload, error",
    [
        ({"status": "ZERO_RESULTS", "results": []}, GeocodeNotFound),
        ({"status": "OK", "results": []}, GeocodeNotFound),
        ({"status": "REQUEST_DENIED", "error_message": "bad key"}, GeocoderError),
    ],
)
def test_geocoder_failures(payload, error):
    geocoder = GoogleGeocoder(api_key="k", client=mock_client(lambda request: httpx.Response(200, json=payload)))
    with pytest.raises(error):
        asyncio.run(geocoder.geocode(MONAS))


def test_geocoder_reports_status():
    payload = {"status": "OVER_QUERY_LIMIT"}
    geocoder = GoogleGeocoder(api_key="k", client=mock_client(lambda request: httpx.Response(200, json=payload)))
    with pytest.raises(GeocoderError) as excinfo:
        asyncio.run(geocoder.geocode(MONAS))
    assert excinfo.value.status == "OVER_QUERY_LIMIT"


def test_geocoder_without_key_is_not_ready():
    geocoder = GoogleGeocoder(api_key="", client=mock_client(lambda request: httpx.Response(500)))
    assert not geocoder.ready
    with pytest.raises(GeocoderError) as excinfo:
        asyncio.run(geocoder.geocode(MONAS))
    assert excinfo.value.status == "NOT_LOADED"


def test_autocomplete_is_restricted_to_country():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json={"status": "OK", "predictions": [{"description": "Ubud, Gianyar, Bali"}, {"description": ""}]},
        )

    autocomplete = GooglePlacesAutocomplete(api_key="k", client=mock_client(handler))
    assert asyncio.run(autocomplete.suggest("  Ubud ")) == ["Ubud, Gianyar, Bali"]
    assert seen["input"] == "Ubud"
    assert seen["components"] == "country:id"
    assert seen["types"] == "geocode"


def test_autocomplete_skips_blank_queries():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    autocomplete = GooglePlacesAutocomplete(api_key="k", client=mock_client(handler))
    assert asyncio.run(autocomplete.suggest("   ")) == []


class FakeAppwrite:
    """Minimal account endpoints keyed on method and path."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = (request.method, request.url.path)
        if route == ("POST", "/v1/account/sessions/email"):
            body = json.loads(request.content)
            if body["password"] != "rahasia123":
                return httpx.Response(401, json={"message": "Invalid credentials", "code": 401})
            return httpx.Response(201, json={"$id": "sess_1", "userId": "user_1"})
        if route == ("GET", "/v1/account"):
            return httpx.Response(200, json={"$id": "user_1", "email": "ayu@example.com", "name": "Ayu"})
        if route == ("POST", "/v1/account"):
            return httpx.Response(201, json={"$id": json.loads(request.content)["userId"], "email": "new@example.com"})
        if route == ("DELETE", "/v1/account/sessions/current"):
            return httpx.Response(204)
        return httpx.Response(404, json={"message": "Route not found"})


def appwrite_service(fake: FakeAppwrite) -> AppwriteIdentityService:
    client = mock_client(fake, base_url="https://cloud.appwrite.io/v1")
    return AppwriteIdentityService(project_id="indastreet", client=client)


def test_appwrite_sign_in_flow():
    fake = FakeAppwrite()
    service = appwrite_service(fake)

    session = asyncio.run(service.create_session("ayu@example.com", "rahasia123"))
    user = asyncio.run(service.get_current_identity())
    asyncio.run(service.delete_current_session())

    assert (session.id, session.user_id) == ("sess_1", "user_1")
    assert user.name == "Ayu"
    assert all(r.headers["X-Appwrite-Project"] == "indastreet" for r in fake.requests)


def test_appwrite_error_carries_message_and_code():
    service = appwrite_service(FakeAppwrite())
    with pytest.raises(IdentityError) as excinfo:
        asyncio.run(service.create_session("ayu@example.com", "salah"))
    assert str(excinfo.value) == "Invalid credentials"
    assert excinfo.value.code == 401


def test_appwrite_create_identity_sends_unique_id():
    fake = FakeAppwrite()
    service = appwrite_service(fake)
    user = asyncio.run(service.create_identity("abc123", "new@example.com", "passwordku", "Budi"))
    assert user.id == "abc123"
    assert json.loads(fake.requests[0].content)["name"] == "Budi"


def test_appwrite_unreachable_is_an_identity_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = AppwriteIdentityService(project_id="p", client=mock_client(handler, base_url="https://x/v1"))
    with pytest.raises(IdentityError):
        asyncio.run(service.get_current_remote_session())


def test_in_memory_service_rejects_short_passwords_and_double_sessions():
    service = InMemoryIdentityService()
    with pytest.raises(IdentityError) as excinfo:
        asyncio.run(service.create_identity("u1", "a@example.com", "short"))
    assert excinfo.value.code == 400

    asyncio.run(service.create_identity("u1", "a@example.com", "longenough"))
    asyncio.run(service.create_session("A@example.com", "longenough"))
    with pytest.raises(IdentityError):
        asyncio.run(service.create_session("a@example.com", "longenough"))


def test_geocoder_non_json_reply_is_a_geocoder_error():
    html = httpx.Response(200, text="<html>captive portal</html>")
    geocoder = GoogleGeocoder(api_key="k", client=mock_client(lambda request: html))
    with pytest.raises(GeocoderError) as excinfo:
        asyncio.run(geocoder.geocode(MONAS))
    assert excinfo.value.status == "INVALID_RESPONSE"


def test_appwrite_non_json_reply_is_an_identity_error():
    html = httpx.Response(200, text="<html>maintenance</html>")
    service = AppwriteIdentityService(project_id="p", client=mock_client(lambda request: html, base_url="https://x/v1"))
    with pytest.raises(IdentityError):
        asyncio.run(service.get_current_identity())


def test_appwrite_reply_without_id_is_an_identity_error():
    reply = httpx.Response(200, json={"email": "ayu@example.com"})
    service = AppwriteIdentityService(project_id="p", client=mock_client(lambda request: reply, base_url="https://x/v1"))
    with pytest.raises(IdentityError):
        asyncio.run(service.get_current_remote_session())


def test_restore_treats_unreadable_identity_reply_as_signed_out():
    html = httpx.Response(200, text="<html>maintenance</html>")
    service = AppwriteIdentityService(project_id="p", client=mock_client(lambda request: html, base_url="https://x/v1"))
    session = SessionState(service)
    asyncio.run(session.restore())
    assert not session.authenticated
