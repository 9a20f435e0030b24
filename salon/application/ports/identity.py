from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from salon.domain.entities.profile import Identity

AuthStateCallback = Callable[[Identity | None], None]


class IdentityPort(ABC):
    @abstractmethod
    def current_user(self) -> Identity | None:
        """Synchronous snapshot of the session."""
        raise NotImplementedError

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        """
        Register a listener for login/logout transitions.
        Returns the unsubscribe function; callers must invoke it on teardown.
        """
        raise NotImplementedError

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Identity:
        """Raises AuthenticationError carrying the provider error code."""
        raise NotImplementedError

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> Identity:
        raise NotImplementedError

    @abstractmethod
    async def sign_out(self) -> None:
        """Raises SignOutFailureError on transport error."""
        raise NotImplementedError

    @abstractmethod
    def id_token(self) -> str | None:
        """Bearer token for the current session, if any."""
        raise NotImplementedError
