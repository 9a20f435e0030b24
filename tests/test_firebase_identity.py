from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from salon.application.exceptions import NETWORK_ERROR, AuthenticationError
from salon.infrastructure.identity.firebase_identity import FirebaseIdentity


def _identity(handler) -> FirebaseIdentity:
    return FirebaseIdentity(
        api_key="test-key",
        base_url="https://auth.test/v1",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_sign_in_opens_session_and_notifies_listeners():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"localId": "uid_1", "email": "ana@example.com", "idToken": "tok"})

    identity = _identity(handler)
    events = []
    unsubscribe = identity.on_auth_state_change(events.append)

    user = asyncio.run(identity.sign_in("ana@example.com", "secret1"))

    assert seen[0].url.path == "/v1/accounts:signInWithPassword"
    assert seen[0].url.params["key"] == "test-key"
    assert json.loads(seen[0].content)["returnSecureToken"] is True
    assert user.uid == "uid_1"
    assert identity.current_user() == user
    assert identity.id_token() == "tok"
    assert events == [user]

    unsubscribe()
    asyncio.run(identity.sign_out())
    assert identity.current_user() is None
    assert identity.id_token() is None
    assert events == [user]


def test_provider_error_code_is_carried():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": "EMAIL_EXISTS"}})

    with pytest.raises(AuthenticationError) as exc_info:
        asyncio.run(_identity(handler).sign_up("ana@example.com", "secret1"))
    assert exc_info.value.code == "EMAIL_EXISTS"


def test_network_error_maps_to_network_code():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(AuthenticationError) as exc_info:
        asyncio.run(_identity(handler).sign_in("ana@example.com", "secret1"))
    assert exc_info.value.code == NETWORK_ERROR == "NETWORK_REQUEST_FAILED"


def test_api_key_required():
    with pytest.raises(ValueError):
        FirebaseIdentity(api_key="", base_url="https://auth.test/v1")
