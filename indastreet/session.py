"""Initialization, language, location and identity session state."""

from __future__ import annotations

import re

from indastreet.config import PHONE_PREFIX
from indastreet.errors import ExternalServiceError, IdentityError
from indastreet.identity import IdentityService, new_unique_id
from indastreet.logs import get_logger
from indastreet.models import AuthResult, Credentials, Language, RemoteSession, UserIdentity
from indastreet.store import StateStore

log = get_logger(__name__)


def normalize_phone(phone: str) -> str:
    """Return ``phone`` as ``+62`` followed by its digits."""
    return f"{PHONE_PREFIX}{re.sub(r'[^0-9]', '', phone)}"


class SessionState(StateStore):
    """App-lifetime session: one-way initialization plus remote identity."""

    def __init__(self, identity: IdentityService) -> None:
        super().__init__()
        self._identity = identity
        self.initialized = False
        self.language: Language | None = None
        self.location: str | None = None
        self.phone_number: str | None = None
        self.show_location_modal = False
        self.user: UserIdentity | None = None
        self.remote_session: RemoteSession | None = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    def select_language(self, lang: Language) -> None:
        self.language = lang
        self.show_location_modal = True
        self._notify()

    def confirm_location(self, location: str, phone: str | None = None) -> None:
        self.location = location
        if phone:
            self.phone_number = normalize_phone(phone)
        self.show_location_modal = False
        if not self.initialized:
            self.initialized = True
            log.info("session_initialized language=%s", self.language.value if self.language else None)
        self._notify()

    def open_location_modal(self) -> None:
        self.show_location_modal = True
        self._notify()

    def close_location_modal(self) -> None:
        self.show_location_modal = False
        self._notify()

    async def restore(self) -> None:
        """Adopt an existing remote session at startup; any failure means signed out."""
        try:
            session = await self._identity.get_current_remote_session()
            user = await self._identity.get_current_identity()
        except ExternalServiceError as exc:
            log.info("session_restore_skipped reason=%r", str(exc))
            return
        self._set_identity(session, user)

    async def sign_in(self, credentials: Credentials) -> AuthResult:
        await self._end_remote_session_quietly()
        return await self._open_session(credentials)

    async def sign_up(self, credentials: Credentials) -> AuthResult:
        await self._end_remote_session_quietly()
        await self._identity.create_identity(new_unique_id(), credentials.email, credentials.password, credentials.name)
        log.info("identity_created email=%r", credentials.email)
        return await self._open_session(credentials)

    async def sign_out(self) -> None:
        """End the remote session if possible; local identity is always cleared."""
        await self._end_remote_session_quietly()
        self._set_identity(None, None)

    async def _open_session(self, credentials: Credentials) -> AuthResult:
        session = await self._identity.create_session(credentials.email, credentials.password)
        user = await self._identity.get_current_identity()
        self._set_identity(session, user)
        log.info("signed_in user_id=%s", user.id)
        return AuthResult(session=session, user=user)

    async def _end_remote_session_quietly(self) -> None:
        try:
            await self._identity.delete_current_session()
        except IdentityError as exc:
            if exc.code == 401:
                log.info("no_remote_session_to_end")
                return
            log.warning("remote_session_delete_failed reason=%r", str(exc))
        except ExternalServiceError as exc:
            log.warning("remote_session_delete_failed reason=%r", str(exc))

    def _set_identity(self, session: RemoteSession | None, user: UserIdentity | None) -> None:
        self.remote_session = session
        self.user = user
        self._notify()
