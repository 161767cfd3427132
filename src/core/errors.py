"""
Custom exceptions and error handling for the trip itinerary store.

Defines application-specific exceptions with error codes so that repositories,
the itinerary service and the HTTP handlers agree on one failure taxonomy.
Storage failures raised by botocore are reclassified here, never swallowed.

Usage:
    from core.errors import NotFoundError, ErrorCode

    raise NotFoundError("Trip 1234 does not exist", code=ErrorCode.TRIP_NOT_FOUND)
"""

from enum import Enum

from botocore.exceptions import BotoCoreError, ClientError


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Client errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    INVALID_JSON = "INVALID_JSON"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Lookup errors
    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"
    SCHEDULE_NOT_FOUND = "SCHEDULE_NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Storage errors
    PERMISSION_DENIED = "PERMISSION_DENIED"
    CORRUPT_RECORD = "CORRUPT_RECORD"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    THROTTLED = "THROTTLED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.INVALID_ID: "The trip id or schedule id is not valid.",
    ErrorCode.INVALID_JSON: "Invalid JSON body.",
    ErrorCode.METHOD_NOT_ALLOWED: "This operation is not supported.",
    ErrorCode.TRIP_NOT_FOUND: "Trip not found.",
    ErrorCode.SCHEDULE_NOT_FOUND: "Schedule not found.",
    ErrorCode.CONFLICT: "The record already exists. Please try again.",
    ErrorCode.PERMISSION_DENIED: "The service is not permitted to access trip storage. Please ask an administrator to check its IAM policy.",
    ErrorCode.CORRUPT_RECORD: "A stored record could not be read. Please contact the administrator.",
    ErrorCode.STORAGE_UNAVAILABLE: "Trip storage is temporarily unavailable. Please try again later.",
    ErrorCode.THROTTLED: "Trip storage is busy. Please try again shortly.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}

_PERMISSION_ERROR_CODES = frozenset({"AccessDeniedException", "UnrecognizedClientException"})
_THROTTLE_ERROR_CODES = frozenset(
    {"ProvisionedThroughputExceededException", "ThrottlingException", "RequestLimitExceeded"}
)
CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class TripStoreError(Exception):
    """Base exception for all trip itinerary store errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class ValidationError(TripStoreError):
    """Input payload is malformed or violates a cross-field rule."""

    def __init__(
        self,
        message: str,
        issues: list[tuple[str, str]] | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        self.issues = issues or []
        super().__init__(message, code=code)


class InvalidIdentifierError(ValidationError):
    """A trip id or schedule id is not a canonical UUID."""

    def __init__(self, message: str, issues: list[tuple[str, str]] | None = None):
        super().__init__(message, issues=issues, code=ErrorCode.INVALID_ID)


class InvalidRequestError(TripStoreError):
    """The request envelope itself is unusable (bad JSON, unsupported method)."""

    pass


class NotFoundError(TripStoreError):
    """A lookup missed or an existence guard failed."""

    pass


class ConflictError(TripStoreError):
    """A not-exists guard failed on create."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFLICT):
        super().__init__(message, code=code)


class PermissionDeniedError(TripStoreError):
    """The store rejected the credentials. Needs operator action, never retried."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.PERMISSION_DENIED):
        super().__init__(message, code=code)


class CorruptRecordError(TripStoreError):
    """A record read back from the store failed the persisted schema."""

    def __init__(self, message: str, issues: list[tuple[str, str]] | None = None):
        self.issues = issues or []
        super().__init__(message, code=ErrorCode.CORRUPT_RECORD)


class StorageError(TripStoreError):
    """The store is unreachable, throttling, or failed for another reason."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORAGE_UNAVAILABLE):
        super().__init__(message, code=code)


class BatchDeleteIncompleteError(StorageError):
    """Bulk delete gave up with unprocessed items left after the retry budget."""

    def __init__(self, message: str, deleted_count: int):
        self.deleted_count = deleted_count
        super().__init__(message, code=ErrorCode.THROTTLED)


def client_error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def is_throttle_error(error: ClientError) -> bool:
    return client_error_code(error) in _THROTTLE_ERROR_CODES


def translate_client_error(error: Exception, operation: str) -> TripStoreError:
    """Map a botocore failure onto the store taxonomy.

    Conditional-check failures are not handled here: only the caller that issued
    the guard knows whether it means "not found" or "already exists".
    """
    if isinstance(error, ClientError):
        code = client_error_code(error)
        if code in _PERMISSION_ERROR_CODES:
            return PermissionDeniedError(f"{operation}: access denied ({code})")
        if code in _THROTTLE_ERROR_CODES:
            return StorageError(f"{operation}: throttled ({code})", code=ErrorCode.THROTTLED)
        return StorageError(f"{operation}: {code or 'unknown error'}")
    if isinstance(error, BotoCoreError):
        return StorageError(f"{operation}: {error}")
    return TripStoreError(f"{operation}: {error}")
