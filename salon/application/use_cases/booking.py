from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, time, tzinfo
from typing import Callable, Union

from salon.application.exceptions import (
    EmptySelectionError,
    InvalidServiceIdError,
    NotAuthenticatedError,
    PersistenceFailureError,
    SubmissionInProgressError,
)
from salon.application.ports.booking_store import BookingStorePort
from salon.application.ports.identity import IdentityPort
from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.application.utils.date_parser import format_booking_date, format_booking_time
from salon.application.utils.liveness import LivenessScope
from salon.domain.entities.booking_record import NewBookingRecord
from salon.domain.entities.booking_state import BookingConfirmation, DraftBooking
from salon.domain.entities.profile import Identity
from salon.domain.entities.service_catalog import Service


@dataclass(frozen=True)
class SetDate:
    value: date


@dataclass(frozen=True)
class SetTime:
    value: time


@dataclass(frozen=True)
class ToggleService:
    service_id: str


DraftEvent = Union[SetDate, SetTime, ToggleService]


def new_draft(now: datetime) -> DraftBooking:
    return DraftBooking(scheduled_at=now)


def compute_total(selected_ids: frozenset[str], catalog: ServiceCatalogPort) -> int:
    return sum(service.price for service in catalog.list_services() if service.id in selected_ids)


def resolve_service_names(selected_ids: frozenset[str], catalog: ServiceCatalogPort) -> tuple[str, ...]:
    """Names of the selected services in catalog order, not selection order."""
    return tuple(service.name for service in catalog.list_services() if service.id in selected_ids)


def reduce_draft(draft: DraftBooking, event: DraftEvent, catalog: ServiceCatalogPort) -> DraftBooking:
    """
    Apply one interaction event to a draft and return the new draft.

    The total is recomputed from the resulting selection on every toggle,
    so selection and price can never be observed out of sync.
    """
    if isinstance(event, SetDate):
        picked = event.value
        return replace(
            draft,
            scheduled_at=draft.scheduled_at.replace(year=picked.year, month=picked.month, day=picked.day),
        )

    if isinstance(event, SetTime):
        picked = event.value
        return replace(
            draft,
            scheduled_at=draft.scheduled_at.replace(
                hour=picked.hour,
                minute=picked.minute,
                second=picked.second,
                microsecond=picked.microsecond,
            ),
        )

    if isinstance(event, ToggleService):
        service = catalog.get_service(event.service_id)
        if service is None:
            raise InvalidServiceIdError(event.service_id)
        # selection holds catalog ids only
        selected = draft.selected_service_ids ^ {service.id}
        return DraftBooking(
            scheduled_at=draft.scheduled_at,
            selected_service_ids=selected,
            total_price=compute_total(selected, catalog),
        )

    raise TypeError(f"Unsupported draft event: {event!r}")


def build_booking_record(
    draft: DraftBooking,
    user: Identity,
    catalog: ServiceCatalogPort,
    created_at: datetime,
) -> NewBookingRecord:
    return NewBookingRecord(
        user_id=user.uid,
        user_email=user.email,
        date=format_booking_date(draft.scheduled_at),
        time=format_booking_time(draft.scheduled_at),
        services=resolve_service_names(draft.selected_service_ids, catalog),
        total_price=draft.total_price,
        created_at=created_at,
    )


class BookingComposer:
    """Owns one draft booking for one booking session and submits it."""

    def __init__(
        self,
        catalog: ServiceCatalogPort,
        store: BookingStorePort,
        identity: IdentityPort,
        timezone: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._identity = identity
        self._clock = clock or (lambda: datetime.now(timezone))
        self._draft = new_draft(self._clock())
        self._scope = LivenessScope("booking_composer")
        self._submitting = False
        self._logger = logging.getLogger(__name__)

    @property
    def draft(self) -> DraftBooking:
        return self._draft

    @property
    def selected_services(self) -> list[Service]:
        return [s for s in self._catalog.list_services() if s.id in self._draft.selected_service_ids]

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        return bool(self._draft.selected_service_ids) and not self._submitting

    @property
    def closed(self) -> bool:
        return not self._scope.alive

    def dispatch(self, event: DraftEvent) -> DraftBooking:
        self._draft = reduce_draft(self._draft, event, self._catalog)
        return self._draft

    def set_date(self, new_date: date) -> DraftBooking:
        return self.dispatch(SetDate(new_date))

    def set_time(self, new_time: time) -> DraftBooking:
        return self.dispatch(SetTime(new_time))

    def toggle_service(self, service_id: str) -> DraftBooking:
        try:
            return self.dispatch(ToggleService(service_id))
        except InvalidServiceIdError:
            self._logger.warning("Unknown service toggled", extra={"service_id": service_id})
            raise

    async def submit(self) -> BookingConfirmation:
        if self._submitting:
            raise SubmissionInProgressError("A booking is already being submitted.")

        draft = self._draft
        if not draft.selected_service_ids:
            raise EmptySelectionError("Select at least one service to book.")

        user = self._identity.current_user()
        if user is None:
            raise NotAuthenticatedError("Please log in to book an appointment.")

        record = build_booking_record(draft, user, self._catalog, created_at=self._clock())

        self._submitting = True
        try:
            booking_id = await self._store.create_booking_record(record)
        except PersistenceFailureError as e:
            self._logger.error(
                "Booking submission failed, draft kept for retry",
                extra={"user_id": user.uid, "error": str(e)},
            )
            raise
        finally:
            self._submitting = False

        self._logger.info(
            "Booking submitted",
            extra={"user_id": user.uid, "booking_id": booking_id},
        )
        confirmation = BookingConfirmation(
            booking_id=booking_id,
            date=record.date,
            time=record.time,
            services=record.services,
            total_price=record.total_price,
        )
        if self._scope.admits("submit"):
            self._draft = new_draft(self._clock())
        return confirmation

    def close(self) -> None:
        """Teardown: the draft is discarded and late async results are ignored."""
        self._scope.close()
