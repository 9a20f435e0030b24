from __future__ import annotations

import asyncio

import pytest

from salon.application.exceptions import AuthenticationError, CredentialsValidationError
from salon.application.use_cases.authenticate import AuthenticateUseCase, sign_in_message, sign_up_message
from salon.infrastructure.identity.mock_identity import MockIdentity
from salon.infrastructure.store.memory_store import MemoryBookingStore


def _use_case():
    identity = MockIdentity()
    store = MemoryBookingStore()
    return AuthenticateUseCase(identity=identity, store=store), identity, store


def test_sign_up_creates_profile_and_sign_in_opens_session():
    uc, identity, store = _use_case()

    user = asyncio.run(uc.sign_up(" Ana ", "ana@example.com ", "secret1"))
    profile = asyncio.run(store.get_user_profile(user.uid))
    assert profile.name == "Ana"
    assert profile.email == "ana@example.com"

    asyncio.run(identity.sign_out())
    signed_in = asyncio.run(uc.sign_in("ana@example.com", "secret1"))
    assert signed_in == user
    assert identity.current_user() == user


@pytest.mark.parametrize(
    "email,password",
    [("", "secret1"), ("ana@example.com", "   "), ("  ", "")],
)
def test_sign_in_requires_both_fields(email, password):
    uc, _, _ = _use_case()
    with pytest.raises(CredentialsValidationError, match="cannot be empty"):
        asyncio.run(uc.sign_in(email, password))


def test_sign_up_validation():
    uc, _, _ = _use_case()
    with pytest.raises(CredentialsValidationError, match="All fields are required"):
        asyncio.run(uc.sign_up("", "ana@example.com", "secret1"))
    with pytest.raises(CredentialsValidationError, match="at least 6 characters"):
        asyncio.run(uc.sign_up("Ana", "ana@example.com", "12345"))


def test_sign_up_length_counts_password_as_typed():
    uc, identity, _ = _use_case()

    user = asyncio.run(uc.sign_up("Ana", "ana@example.com", " 12345"))
    assert identity.current_user() == user

    with pytest.raises(CredentialsValidationError, match="at least 6 characters"):
        asyncio.run(uc.sign_up("Bo", "bo@example.com", "12345"))
    with pytest.raises(CredentialsValidationError, match="All fields are required"):
        asyncio.run(uc.sign_up("Bo", "bo@example.com", "      "))


def test_provider_errors_are_mapped_to_messages():
    uc, _, _ = _use_case()

    with pytest.raises(AuthenticationError) as exc_info:
        asyncio.run(uc.sign_in("nobody@example.com", "secret1"))
    assert exc_info.value.code == "EMAIL_NOT_FOUND"
    assert str(exc_info.value) == "No account found with this email!"

    asyncio.run(uc.sign_up("Ana", "ana@example.com", "secret1"))
    with pytest.raises(AuthenticationError, match="already in use"):
        asyncio.run(uc.sign_up("Ana", "ana@example.com", "secret1"))
    with pytest.raises(AuthenticationError, match="Incorrect password"):
        asyncio.run(uc.sign_in("ana@example.com", "wrong-password"))


def test_message_lookup_handles_suffixes_and_unknown_codes():
    assert sign_up_message("WEAK_PASSWORD : Password should be at least 6 characters") == (
        "Password should be at least 6 characters!"
    )
    assert sign_in_message("INVALID_LOGIN_CREDENTIALS") == "Incorrect password!"
    assert sign_in_message("SOMETHING_NEW") == "Login failed. Please try again."
    assert sign_up_message("SOMETHING_NEW") == "Sign-up failed. Please try again."
