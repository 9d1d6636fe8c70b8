"""Identity service clients: an offline in-memory one and an Appwrite REST one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol
from uuid import uuid4

import httpx

from indastreet.config import APPWRITE_ENDPOINT, APPWRITE_PROJECT_ID, HTTP_TIMEOUT_SECONDS
from indastreet.errors import IdentityError
from indastreet.logs import get_logger
from indastreet.models import RemoteSession, UserIdentity

log = get_logger(__name__)


class IdentityService(Protocol):
    async def get_current_identity(self) -> UserIdentity: ...

    async def get_current_remote_session(self) -> RemoteSession: ...

    async def create_session(self, email: str, password: str) -> RemoteSession: ...

    async def create_identity(self, unique_id: str, email: str, password: str, name: str | None = None) -> UserIdentity: ...

    async def delete_current_session(self) -> None: ...


def new_unique_id() -> str:
    return uuid4().hex[:20]


@dataclass
class _Account:
    identity: UserIdentity
    password: str


class InMemoryIdentityService:
    """Account registry held in process memory; used when no backend is configured."""

    def __init__(self) -> None:
        self._accounts: dict[str, _Account] = {}
        self._current: RemoteSession | None = None

    async def get_current_identity(self) -> UserIdentity:
        session = self._require_session()
        for account in self._accounts.values():
            if account.identity.id == session.user_id:
                return account.identity
        raise IdentityError("User not found", code=404)

    async def get_current_remote_session(self) -> RemoteSession:
        return self._require_session()

    async def create_session(self, email: str, password: str) -> RemoteSession:
        if self._current is not None:
            raise IdentityError("Creation of a session is prohibited when a session is active.", code=401)
        account = self._accounts.get(email.lower())
        if account is None or account.password != password:
            raise IdentityError("Invalid credentials. Please check the email and password.", code=401)
        self._current = RemoteSession(id=uuid4().hex, user_id=account.identity.id)
        return self._current

    async def create_identity(self, unique_id: str, email: str, password: str, name: str | None = None) -> UserIdentity:
        key = email.lower()
        if key in self._accounts:
            raise IdentityError("A user with the same email already exists.", code=409)
        if len(password) < 8:
            raise IdentityError("Password must be at least 8 characters.", code=400)
        identity = UserIdentity(id=unique_id, email=email, name=name or "")
        self._accounts[key] = _Account(identity=identity, password=password)
        return identity

    async def delete_current_session(self) -> None:
        self._require_session()
        self._current = None

    def _require_session(self) -> RemoteSession:
        if self._current is None:
            raise IdentityError("User (role: guests) missing scope (account)", code=401)
        return self._current


class AppwriteIdentityService:
    """
    Account endpoints of an Appwrite project over REST.

    The session cookie set by ``POST /account/sessions/email`` is kept in the
    client's cookie jar, so the client behaves like a browser session.
    """

    def __init__(
        self,
        project_id: str = APPWRITE_PROJECT_ID,
        endpoint: str = APPWRITE_ENDPOINT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=endpoint.rstrip("/"),
            timeout=httpx.Timeout(HTTP_TIMEOUT_SECONDS, connect=5.0),
        )
        self._headers = {
            "X-Appwrite-Project": project_id,
            "X-Appwrite-Response-Format": "1.4.0",
        }

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_current_identity(self) -> UserIdentity:
        data = await self._request("GET", "/account")
        return _identity_from(data)

    async def get_current_remote_session(self) -> RemoteSession:
        data = await self._request("GET", "/account/sessions/current")
        return _session_from(data)

    async def create_session(self, email: str, password: str) -> RemoteSession:
        data = await self._request("POST", "/account/sessions/email", json={"email": email, "password": password})
        return _session_from(data)

    async def create_identity(self, unique_id: str, email: str, password: str, name: str | None = None) -> UserIdentity:
        payload: dict[str, Any] = {"userId": unique_id, "email": email, "password": password}
        if name:
            payload["name"] = name
        data = await self._request("POST", "/account", json=payload)
        return _identity_from(data)

    async def delete_current_session(self) -> None:
        await self._request("DELETE", "/account/sessions/current")

    async def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, path, json=json, headers=self._headers)
        except httpx.HTTPError as exc:
            raise IdentityError(f"Identity service unreachable: {exc}") from exc

        if resp.status_code >= 400:
            message = resp.text[:400]
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = str(body.get("message", message))
            log.info("identity_request_failed method=%s path=%s status=%d", method, path, resp.status_code)
            raise IdentityError(message, code=resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as exc:
            raise IdentityError(f"Identity service sent an unreadable reply to {method} {path}") from exc
        if not isinstance(data, dict):
            raise IdentityError(f"Identity service sent an unexpected reply to {method} {path}")
        return data


def _require_id(data: dict[str, Any], kind: str) -> str:
    value = data.get("$id")
    if not value:
        raise IdentityError(f"Identity service returned a {kind} without an id")
    return str(value)


def _identity_from(data: dict[str, Any]) -> UserIdentity:
    return UserIdentity(id=_require_id(data, "user"), email=str(data.get("email", "")), name=str(data.get("name", "")))


def _session_from(data: dict[str, Any]) -> RemoteSession:
    return RemoteSession(id=_require_id(data, "session"), user_id=str(data.get("userId", "")))


def build_identity_service() -> IdentityService:
    """Pick the Appwrite client when a project is configured, else the in-memory one."""
    if APPWRITE_PROJECT_ID:
        return AppwriteIdentityService()
    log.warning("APPWRITE_PROJECT_ID is not set; using in-memory identity service.")
    return InMemoryIdentityService()
