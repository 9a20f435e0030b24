"""
Tests for the profile session: profile fetch, upcoming list, listeners and teardown.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

import pytest

from salon.application.exceptions import NotAuthenticatedError, RecordNotFoundError, SignOutFailureError
from salon.application.use_cases.profile import ProfileSession
from salon.domain.entities.profile import Identity
from salon.infrastructure.identity.mock_identity import MockIdentity
from salon.infrastructure.store.memory_store import MemoryBookingStore

NOW = datetime(2025, 3, 1, 9, 0)
USER = Identity(uid="user_1", email="ana@example.com")


def _seeded_store() -> MemoryBookingStore:
    store = MemoryBookingStore()
    asyncio.run(store.create_user_profile("user_1", "Ana", "ana@example.com"))
    store.put_booking_document("b1", {"userId": "user_1", "date": "2025-03-02", "time": "11:00 AM", "services": ["Haircut"], "totalPrice": 500})
    store.put_booking_document("b2", {"userId": "user_1", "date": "2025-02-20", "time": "11:00 AM", "services": ["Haircut"], "totalPrice": 500})
    store.put_booking_document("b3", {"userId": "user_1", "date": "2025-03-01", "time": "10:00 AM", "services": "Haircut, Beard Trim", "totalPrice": 800})
    store.put_booking_document("b4", {"userId": "user_1", "date": "", "time": ""})
    store.put_booking_document("other", {"userId": "user_2", "date": "2025-03-03", "time": "10:00 AM"})
    return store


def test_load_returns_profile_and_sorted_upcoming():
    reported = []
    session = ProfileSession(MockIdentity(user=USER), _seeded_store(), clock=lambda: NOW, report=reported.append)

    view = asyncio.run(session.load())

    assert view.name == "Ana"
    assert view.email == "ana@example.com"
    assert [r.id for r in view.upcoming] == ["b3", "b1"]
    assert view.upcoming[0].services == ("Haircut", "Beard Trim")
    assert [e.record_id for e in reported] == ["b4"]


def test_load_requires_identity():
    session = ProfileSession(MockIdentity(), _seeded_store(), clock=lambda: NOW)
    with pytest.raises(NotAuthenticatedError):
        asyncio.run(session.load())


def test_missing_profile_document_is_distinct_outcome():
    session = ProfileSession(MockIdentity(user=Identity(uid="ghost")), MemoryBookingStore(), clock=lambda: NOW)
    with pytest.raises(RecordNotFoundError):
        asyncio.run(session.load())


def test_blank_name_falls_back_to_default():
    store = MemoryBookingStore()
    asyncio.run(store.create_user_profile("user_1", "  ", "ana@example.com"))
    session = ProfileSession(MockIdentity(user=USER), store, clock=lambda: NOW)

    assert asyncio.run(session.load()).name == "User"


def test_results_after_close_are_discarded():
    store = _seeded_store()
    session = ProfileSession(MockIdentity(user=USER), store, clock=lambda: NOW)

    async def scenario():
        pending = asyncio.create_task(session.load())
        session.close()
        return await pending

    assert asyncio.run(scenario()) is None


def test_listener_registered_on_open_and_released_on_close():
    identity = MockIdentity(user=USER)
    session = ProfileSession(identity, MemoryBookingStore(), clock=lambda: NOW)

    session.open()
    session.open()
    assert identity.listener_count == 1
    assert session.signed_in is True

    asyncio.run(identity.sign_out())
    assert session.signed_in is False

    session.close()
    assert identity.listener_count == 0


def test_sign_out_failure_is_surfaced():
    identity = MockIdentity(user=USER, fail_sign_out=True)
    session = ProfileSession(identity, MemoryBookingStore(), clock=lambda: NOW)

    with pytest.raises(SignOutFailureError):
        asyncio.run(session.sign_out())
    assert identity.current_user() == USER


def test_stored_totals_as_decimal_strings_load_and_garbage_is_skipped(caplog):
    store = MemoryBookingStore()
    asyncio.run(store.create_user_profile("user_1", "Ana", "ana@example.com"))
    store.put_booking_document("s1", {"userId": "user_1", "date": "2025-03-02", "time": "11:00 AM", "totalPrice": "500.0"})
    store.put_booking_document("s2", {"userId": "user_1", "date": "2025-03-03", "time": "11:00 AM", "totalPrice": "abc"})
    session = ProfileSession(MockIdentity(user=USER), store, clock=lambda: NOW)

    with caplog.at_level(logging.WARNING):
        view = asyncio.run(session.load())

    assert [r.id for r in view.upcoming] == ["s1"]
    assert view.upcoming[0].total_price == 500
    assert "Unreadable booking document" in caplog.text
