from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from salon.core.config import settings
from salon.application.ports.booking_store import BookingStorePort
from salon.application.ports.identity import IdentityPort
from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.application.use_cases.authenticate import AuthenticateUseCase
from salon.application.use_cases.booking import BookingComposer
from salon.application.use_cases.profile import ProfileSession
from salon.infrastructure.identity.firebase_identity import FirebaseIdentity
from salon.infrastructure.identity.mock_identity import MockIdentity
from salon.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from salon.infrastructure.store.firestore_store import FirestoreBookingStore
from salon.infrastructure.store.memory_store import MemoryBookingStore


_composer: BookingComposer | None = None


def _use_mocks() -> bool:
    return settings.ENV.lower() in {"dev", "local"} or not (
        settings.FIREBASE_API_KEY and settings.FIREBASE_PROJECT_ID
    )


@lru_cache
def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


@lru_cache
def get_identity() -> IdentityPort:
    logger = logging.getLogger(__name__)
    if _use_mocks():
        logger.info("Using MockIdentity (ENV=%s)", settings.ENV)
        return MockIdentity()
    logger.info("Using FirebaseIdentity")
    return FirebaseIdentity()


@lru_cache
def get_booking_store() -> BookingStorePort:
    if _use_mocks():
        return MemoryBookingStore()
    return FirestoreBookingStore(token_provider=get_identity().id_token)


def get_booking_composer() -> BookingComposer:
    """The draft of the current booking screen; a closed composer is replaced by a fresh one."""
    global _composer
    if _composer is None or _composer.closed:
        _composer = BookingComposer(
            catalog=get_service_catalog(),
            store=get_booking_store(),
            identity=get_identity(),
            timezone=get_timezone(),
        )
    return _composer


def reset_booking_composer() -> BookingComposer:
    global _composer
    if _composer is not None:
        _composer.close()
    _composer = None
    return get_booking_composer()


def get_profile_session() -> ProfileSession:
    return ProfileSession(
        identity=get_identity(),
        store=get_booking_store(),
        timezone=get_timezone(),
    )


def get_authenticate_use_case() -> AuthenticateUseCase:
    return AuthenticateUseCase(identity=get_identity(), store=get_booking_store())
