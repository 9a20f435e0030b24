from __future__ import annotations

import logging
import uuid
from typing import Callable

from salon.application.exceptions import AuthenticationError, SignOutFailureError
from salon.application.ports.identity import AuthStateCallback, IdentityPort
from salon.domain.entities.profile import Identity
from salon.infrastructure.identity.listeners import AuthStateNotifier


class MockIdentity(IdentityPort):
    """In-memory accounts for local runs and tests."""

    def __init__(self, user: Identity | None = None, fail_sign_out: bool = False) -> None:
        self._accounts: dict[str, tuple[str, Identity]] = {}
        self._current = user
        self._fail_sign_out = fail_sign_out
        self._notifier = AuthStateNotifier()
        self._logger = logging.getLogger(__name__)

    @property
    def listener_count(self) -> int:
        return len(self._notifier)

    def current_user(self) -> Identity | None:
        return self._current

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def _set_current(self, user: Identity | None) -> None:
        self._current = user
        self._notifier.notify(user)

    async def sign_in(self, email: str, password: str) -> Identity:
        account = self._accounts.get(email.lower())
        if account is None:
            raise AuthenticationError("EMAIL_NOT_FOUND")
        stored_password, user = account
        if stored_password != password:
            raise AuthenticationError("INVALID_PASSWORD")
        self._set_current(user)
        return user

    async def sign_up(self, email: str, password: str) -> Identity:
        if "@" not in email:
            raise AuthenticationError("INVALID_EMAIL")
        if email.lower() in self._accounts:
            raise AuthenticationError("EMAIL_EXISTS")
        user = Identity(uid=f"mock_{uuid.uuid4().hex[:12]}", email=email)
        self._accounts[email.lower()] = (password, user)
        self._logger.info("Mock account created", extra={"user_id": user.uid})
        self._set_current(user)
        return user

    async def sign_out(self) -> None:
        if self._fail_sign_out:
            raise SignOutFailureError("Network error. Please try again.")
        self._set_current(None)

    def id_token(self) -> str | None:
        return f"mock-token-{self._current.uid}" if self._current else None
