from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable

from salon.application.exceptions import NotAuthenticatedError, RecordNotFoundError
from salon.application.ports.booking_store import BookingStorePort
from salon.application.ports.identity import IdentityPort
from salon.application.use_cases.upcoming import MalformedReporter, filter_upcoming
from salon.application.utils.liveness import LivenessScope
from salon.domain.entities.booking_record import BookingRecord
from salon.domain.entities.profile import Identity

DEFAULT_DISPLAY_NAME = "User"


@dataclass(frozen=True)
class ProfileView:
    name: str
    email: str | None
    upcoming: list[BookingRecord]


class ProfileSession:
    def __init__(
        self,
        identity: IdentityPort,
        store: BookingStorePort,
        timezone: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
        report: MalformedReporter | None = None,
    ) -> None:
        self._identity = identity
        self._store = store
        self._timezone = timezone
        self._clock = clock or (lambda: datetime.now(timezone))
        self._report = report
        self._scope = LivenessScope("profile")
        self._unsubscribe: Callable[[], None] | None = None
        self._signed_in = identity.current_user() is not None
        self._logger = logging.getLogger(__name__)

    @property
    def signed_in(self) -> bool:
        return self._signed_in

    def open(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._identity.on_auth_state_change(self._on_auth_state_change)

    def close(self) -> None:
        self._scope.close()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_auth_state_change(self, user: Identity | None) -> None:
        if not self._scope.admits("auth_state_change"):
            return
        self._signed_in = user is not None

    async def load(self) -> ProfileView | None:
        """
        Fetch the profile and the user's upcoming bookings.
        Returns None when the session was closed while the fetch was in flight.
        """
        user = self._identity.current_user()
        if user is None:
            raise NotAuthenticatedError("User not logged in")

        try:
            profile = await self._store.get_user_profile(user.uid)
        except RecordNotFoundError:
            self._logger.warning("Profile document missing", extra={"user_id": user.uid})
            raise
        records = await self._store.query_bookings_by_user(user.uid)

        if not self._scope.admits("load"):
            return None

        upcoming = filter_upcoming(records, self._clock(), report=self._report, timezone=self._timezone)
        return ProfileView(
            name=profile.name or DEFAULT_DISPLAY_NAME,
            email=profile.email or user.email,
            upcoming=upcoming,
        )

    async def sign_out(self) -> None:
        await self._identity.sign_out()
        self._logger.info("Signed out")
