from __future__ import annotations

import logging
import uuid
from typing import Any, Callable

import httpx

from salon.application.exceptions import PersistenceFailureError, RecordNotFoundError
from salon.application.ports.booking_store import BookingStorePort
from salon.core.config import settings
from salon.domain.entities.booking_record import BookingRecord, NewBookingRecord
from salon.domain.entities.profile import UserProfile
from salon.infrastructure.store.firestore_codec import decode_fields, document_id, encode_fields

BOOKINGS_COLLECTION = "bookings"
USERS_COLLECTION = "users"


class FirestoreBookingStore(BookingStorePort):
    """Firestore REST v1 adapter. Every call is made with the signed-in user's ID token."""

    def __init__(
        self,
        token_provider: Callable[[], str | None],
        project_id: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._project_id = project_id or settings.FIREBASE_PROJECT_ID
        self._base_url = (base_url or settings.FIRESTORE_BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._project_id:
            raise ValueError("FIREBASE_PROJECT_ID is required for Firestore")

    @property
    def _database(self) -> str:
        return f"projects/{self._project_id}/databases/(default)"

    @property
    def _documents_url(self) -> str:
        return f"{self._base_url}/{self._database}/documents"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _commit_create(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Create-only write; createdAt is stamped by the server."""
        payload = {
            "writes": [
                {
                    "update": {
                        "name": f"{self._database}/documents/{collection}/{doc_id}",
                        "fields": encode_fields(fields),
                    },
                    "currentDocument": {"exists": False},
                    "updateTransforms": [
                        {"fieldPath": "createdAt", "setToServerValue": "REQUEST_TIME"},
                    ],
                }
            ]
        }
        response = await self._client.post(
            f"{self._documents_url}:commit",
            json=payload,
            headers=self._headers(),
        )
        response.raise_for_status()

    async def create_booking_record(self, record: NewBookingRecord) -> str:
        record_id = uuid.uuid4().hex[:20]
        fields = record.to_document()
        fields.pop("createdAt", None)
        try:
            await self._commit_create(BOOKINGS_COLLECTION, record_id, fields)
        except httpx.HTTPError as e:
            self._logger.error("Error creating booking record", extra={"user_id": record.user_id, "error": str(e)})
            raise PersistenceFailureError("Could not save your booking. Please try again.") from e

        self._logger.info("Booking record created", extra={"record_id": record_id, "user_id": record.user_id})
        return record_id

    async def query_bookings_by_user(self, user_id: str) -> list[BookingRecord]:
        query = {
            "structuredQuery": {
                "from": [{"collectionId": BOOKINGS_COLLECTION}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": "userId"},
                        "op": "EQUAL",
                        "value": {"stringValue": user_id},
                    }
                },
            }
        }
        try:
            response = await self._client.post(
                f"{self._documents_url}:runQuery",
                json=query,
                headers=self._headers(),
            )
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error querying bookings", extra={"user_id": user_id, "error": str(e)})
            raise PersistenceFailureError("Could not load your bookings.") from e

        records: list[BookingRecord] = []
        for row in rows:
            # runQuery emits rows without a document (e.g. only readTime) for empty results
            document = row.get("document")
            if not document:
                continue
            try:
                data = decode_fields(document.get("fields", {}))
            except ValueError as e:
                self._logger.warning(
                    "Undecodable booking document",
                    extra={"record_id": document.get("name"), "error": str(e)},
                )
                data = {"userId": user_id}
            record_id = document_id(document["name"])
            try:
                records.append(BookingRecord.from_document(record_id, data))
            except (ValueError, TypeError) as e:
                self._logger.warning("Unreadable booking document", extra={"record_id": record_id, "error": str(e)})
        return records

    async def get_user_profile(self, user_id: str) -> UserProfile:
        try:
            response = await self._client.get(
                f"{self._documents_url}/{USERS_COLLECTION}/{user_id}",
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            self._logger.error("Error fetching user profile", extra={"user_id": user_id, "error": str(e)})
            raise PersistenceFailureError("Failed to fetch user name") from e

        if response.status_code == 404:
            raise RecordNotFoundError("User not found in Firestore!")
        try:
            response.raise_for_status()
            document = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error fetching user profile", extra={"user_id": user_id, "error": str(e)})
            raise PersistenceFailureError("Failed to fetch user name") from e

        return UserProfile.from_document(decode_fields(document.get("fields", {})))

    async def create_user_profile(self, uid: str, name: str, email: str) -> None:
        try:
            await self._commit_create(USERS_COLLECTION, uid, {"uid": uid, "name": name, "email": email})
        except httpx.HTTPError as e:
            self._logger.error("Error creating user profile", extra={"user_id": uid, "error": str(e)})
            raise PersistenceFailureError("Could not save your profile.") from e
