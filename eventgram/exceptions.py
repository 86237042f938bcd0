"""Custom exception classes for the Eventgram API."""

from typing import Any


class EventgramError(Exception):
    """Base exception for the Eventgram API."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}


class NotSignedInError(EventgramError):
    """Raised when no authenticated caller is present (403)."""

    def __init__(
        self,
        message: str = "Not signed in.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="NOT_SIGNED_IN",
            details=details,
        )


class NotRegisteredError(EventgramError):
    """Raised when the caller is authenticated but has no user record (403)."""

    def __init__(
        self,
        message: str = "You must register before doing that.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="NOT_REGISTERED",
            details=details,
        )


class ValidationFailedError(EventgramError):
    """Raised when a payload is malformed or out of policy (400)."""

    def __init__(
        self,
        message: str = "Invalid request data.",
        details: dict[str, Any] | None = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class UnknownEventError(ValidationFailedError):
    """Raised when a post references an event that does not exist (400)."""

    def __init__(
        self,
        message: str = "Post does not match an existing event.",
        event_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        if event_id:
            error_details["event_id"] = event_id
        super().__init__(
            message=message,
            details=error_details,
            error_code="UNKNOWN_EVENT",
        )


class NotFoundError(EventgramError):
    """Raised when an entity is not found (404)."""

    def __init__(
        self,
        message: str = "Not found.",
        kind: str | None = None,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize NotFoundError.

        Args:
            message: Error message
            kind: Entity kind that was looked up
            entity_id: Identifier that was not found
            details: Additional error details
        """
        error_details = details or {}
        if kind:
            error_details["kind"] = kind
        if entity_id:
            error_details["id"] = entity_id
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=error_details,
        )


class ForbiddenError(EventgramError):
    """Raised when the caller is not allowed to perform an action (403)."""

    def __init__(
        self,
        message: str = "Forbidden.",
        details: dict[str, Any] | None = None,
        error_code: str = "FORBIDDEN",
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code=error_code,
            details=details,
        )


class PrivateResourceError(ForbiddenError):
    """Raised when viewing a private event or profile (403)."""

    def __init__(
        self,
        message: str = "This resource is private.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, details=details, error_code="PRIVATE")


class InactiveEventError(ForbiddenError):
    """Raised when posting to an event outside its active window (403)."""

    def __init__(
        self,
        message: str = "This event is not currently active.",
        event_id: str | None = None,
    ) -> None:
        details = {"event_id": event_id} if event_id else None
        super().__init__(
            message=message, details=details, error_code="EVENT_INACTIVE"
        )


class ImageAlreadyAttachedError(ForbiddenError):
    """Raised when attaching an image to a post that already has one (403)."""

    def __init__(
        self,
        message: str = "Cannot overwrite the image in a post.",
        post_id: str | None = None,
    ) -> None:
        details = {"post_id": post_id} if post_id else None
        super().__init__(
            message=message,
            details=details,
            error_code="IMAGE_ALREADY_ATTACHED",
        )


class ConflictError(EventgramError):
    """Raised when a unique value is already taken (409)."""

    def __init__(
        self,
        message: str = "Conflict.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class InternalError(EventgramError):
    """Raised for store or generator failures (500).

    The message is returned to the caller, so it must stay generic; the
    underlying cause is logged where it is caught.
    """

    def __init__(
        self,
        message: str = "An internal error occurred.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="INTERNAL_ERROR",
            details=details,
        )


class IdentifierGenerationError(InternalError):
    """Raised when the random source for identifiers is unavailable."""

    def __init__(self, message: str = "Failed to generate an identifier.") -> None:
        super().__init__(message=message)


class IdentifierCollisionError(InternalError):
    """Raised when a generated identifier already exists in the store."""

    def __init__(
        self,
        message: str = "Failed to create the record, please try again.",
        kind: str | None = None,
    ) -> None:
        details = {"kind": kind} if kind else None
        super().__init__(message=message, details=details)


class RequestTooLargeError(EventgramError):
    """Raised when request payload exceeds size limit (413)."""

    def __init__(
        self,
        message: str = "Request payload too large",
        max_size: str = "10MB",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize RequestTooLargeError.

        Args:
            message: Error message
            max_size: Maximum allowed size
            details: Additional error details
        """
        error_details = details or {}
        error_details["max_size"] = max_size
        super().__init__(
            message=message,
            status_code=413,
            error_code="PAYLOAD_TOO_LARGE",
            details=error_details,
        )


class ImageStoreError(Exception):
    """Raised by the blob store adapter when an object operation fails."""


class ImageQueueError(Exception):
    """Raised when an image processing task cannot be enqueued."""


class UnsupportedImageError(ValueError):
    """Raised when image bytes are not a supported format."""
