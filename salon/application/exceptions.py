
class BookingError(RuntimeError):
    """Base class for recoverable booking-flow errors."""
    pass


class EmptySelectionError(BookingError):
    """Raised when a booking is submitted with no services selected."""
    pass


class InvalidServiceIdError(BookingError):
    """Raised when a service id is not present in the catalog."""

    def __init__(self, service_id: str) -> None:
        super().__init__(f"Unknown service id: {service_id!r}")
        self.service_id = service_id


class NotAuthenticatedError(BookingError):
    """Raised when an operation needs a signed-in user and there is none."""
    pass


class SubmissionInProgressError(BookingError):
    """Raised when submit is called while a previous submit is still pending."""
    pass


class PersistenceFailureError(BookingError):
    """Raised when the document store fails (network, permission, bad response)."""
    pass


class RecordNotFoundError(BookingError):
    """Raised when a requested document does not exist."""
    pass


class MalformedRecordError(BookingError):
    """Describes a stored booking whose date/time cannot be interpreted. Reported, never raised to users."""

    def __init__(self, record_id: str, reason: str) -> None:
        super().__init__(f"Malformed booking record {record_id}: {reason}")
        self.record_id = record_id
        self.reason = reason


class SignOutFailureError(BookingError):
    """Raised when the identity provider fails to end the session."""
    pass


class AuthenticationError(BookingError):
    """Raised when the identity provider rejects a sign-in or sign-up."""

    def __init__(self, code: str, message: str | None = None) -> None:
        super().__init__(message or code)
        self.code = code


class CredentialsValidationError(BookingError):
    """Raised when sign-in/sign-up input fails local validation."""
    pass


# Provider-neutral code for transport failures during sign-in/sign-up.
NETWORK_ERROR = "NETWORK_REQUEST_FAILED"
