from __future__ import annotations

import logging
from typing import Callable

import httpx

from salon.application.exceptions import NETWORK_ERROR, AuthenticationError
from salon.application.ports.identity import AuthStateCallback, IdentityPort
from salon.core.config import settings
from salon.domain.entities.profile import Identity
from salon.infrastructure.identity.listeners import AuthStateNotifier


class FirebaseIdentity(IdentityPort):
    """Email/password sessions through the Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key or settings.FIREBASE_API_KEY
        self._base_url = (base_url or settings.FIREBASE_AUTH_BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._current: Identity | None = None
        self._id_token: str | None = None
        self._notifier = AuthStateNotifier()
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("FIREBASE_API_KEY is required for Firebase authentication")

    def current_user(self) -> Identity | None:
        return self._current

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def id_token(self) -> str | None:
        return self._id_token

    async def _call(self, method: str, email: str, password: str) -> Identity:
        url = f"{self._base_url}/accounts:{method}"
        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            response = await self._client.post(url, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as e:
            self._logger.error("Identity provider unreachable", extra={"error": str(e)})
            raise AuthenticationError(NETWORK_ERROR) from e

        if response.status_code >= 400:
            try:
                code = response.json().get("error", {}).get("message") or "UNKNOWN"
            except ValueError:
                code = "UNKNOWN"
            self._logger.info("Identity provider rejected request", extra={"reason": code})
            raise AuthenticationError(code)

        data = response.json()
        user = Identity(uid=data["localId"], email=data.get("email") or email)
        self._id_token = data.get("idToken")
        return user

    async def sign_in(self, email: str, password: str) -> Identity:
        user = await self._call("signInWithPassword", email, password)
        self._current = user
        self._notifier.notify(user)
        return user

    async def sign_up(self, email: str, password: str) -> Identity:
        # Sign-up also opens a session, which is kept so the profile document can be written.
        user = await self._call("signUp", email, password)
        self._current = user
        self._notifier.notify(user)
        return user

    async def sign_out(self) -> None:
        # ID tokens are stateless; ending the session is local.
        self._current = None
        self._id_token = None
        self._notifier.notify(None)
