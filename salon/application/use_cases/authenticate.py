from __future__ import annotations

import logging

from salon.application.exceptions import (
    AuthenticationError,
    CredentialsValidationError,
    NETWORK_ERROR,
    PersistenceFailureError,
)
from salon.application.ports.booking_store import BookingStorePort
from salon.application.ports.identity import IdentityPort
from salon.domain.entities.profile import Identity

MIN_PASSWORD_LENGTH = 6

SIGN_IN_MESSAGES = {
    "INVALID_EMAIL": "Invalid email format!",
    "EMAIL_NOT_FOUND": "No account found with this email!",
    "INVALID_PASSWORD": "Incorrect password!",
    "INVALID_LOGIN_CREDENTIALS": "Incorrect password!",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many failed attempts. Try again later.",
}

SIGN_UP_MESSAGES = {
    "EMAIL_EXISTS": "This email is already in use!",
    "INVALID_EMAIL": "Invalid email format!",
    "WEAK_PASSWORD": "Password should be at least 6 characters!",
    NETWORK_ERROR: "Network error. Please check your internet connection!",
}


def sign_in_message(code: str) -> str:
    # Provider codes may carry a suffix, e.g. "WEAK_PASSWORD : Password should be ..."
    return SIGN_IN_MESSAGES.get(code.split(":")[0].strip(), "Login failed. Please try again.")


def sign_up_message(code: str) -> str:
    return SIGN_UP_MESSAGES.get(code.split(":")[0].strip(), "Sign-up failed. Please try again.")


class AuthenticateUseCase:
    def __init__(self, identity: IdentityPort, store: BookingStorePort) -> None:
        self._identity = identity
        self._store = store
        self._logger = logging.getLogger(__name__)

    async def sign_in(self, email: str, password: str) -> Identity:
        email = (email or "").strip()
        password = (password or "").strip()
        if not email or not password:
            raise CredentialsValidationError("Email and password cannot be empty!")

        try:
            user = await self._identity.sign_in(email, password)
        except AuthenticationError as e:
            self._logger.info("Sign-in rejected", extra={"reason": e.code})
            raise AuthenticationError(e.code, sign_in_message(e.code)) from e

        self._logger.info("Signed in", extra={"user_id": user.uid})
        return user

    async def sign_up(self, name: str, email: str, password: str) -> Identity:
        name = (name or "").strip()
        email = (email or "").strip()
        raw_password = password or ""
        password = raw_password.strip()
        if not name or not email or not password:
            raise CredentialsValidationError("All fields are required!")
        # length is checked on the password as typed
        if len(raw_password) < MIN_PASSWORD_LENGTH:
            raise CredentialsValidationError("Password must be at least 6 characters!")

        try:
            user = await self._identity.sign_up(email, password)
        except AuthenticationError as e:
            self._logger.info("Sign-up rejected", extra={"reason": e.code})
            raise AuthenticationError(e.code, sign_up_message(e.code)) from e

        try:
            await self._store.create_user_profile(user.uid, name, email)
        except PersistenceFailureError as e:
            self._logger.error("User profile not stored", extra={"user_id": user.uid, "error": str(e)})
            raise

        self._logger.info("Account created", extra={"user_id": user.uid})
        return user
