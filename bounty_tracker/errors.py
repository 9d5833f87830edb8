"""Error types for the bounty tracker.

Every error carries an ``ErrorKind`` so that callers (the HTTP layer in
particular) can choose a response without inspecting message text.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Discriminant for tracker errors."""

    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    EMPTY_INPUT = "empty_input"
    EXTERNAL_SERVICE = "external_service"
    INTERNAL = "internal"


class BountyTrackerError(Exception):
    """Base class for all tracker errors."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(BountyTrackerError):
    """Input is missing or invalid. Nothing was persisted."""

    kind = ErrorKind.VALIDATION


class InvalidStatusError(ValidationError):
    """A ticket status outside the allowed set."""

    def __init__(self, message: str = "Invalid ticket status"):
        super().__init__(message)


class BadRequestError(BountyTrackerError):
    """A malformed identifier."""

    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(BountyTrackerError):
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(BountyTrackerError):
    """The referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class EmptyInputError(BountyTrackerError):
    """A batch operation was given nothing to do."""

    kind = ErrorKind.EMPTY_INPUT


class ExternalServiceError(BountyTrackerError):
    """The builder service failed or returned a non-success status.

    Args:
        message: Human readable summary
        status_code: Upstream HTTP status, None for transport failures
        body: Raw upstream response body, echoed for operator debugging
    """

    kind = ErrorKind.EXTERNAL_SERVICE

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        errors: Optional[List[str]] = None,
    ):
        super().__init__(message, errors)
        self.status_code = status_code
        self.body = body


class InternalError(BountyTrackerError):
    """Unexpected storage or local failure."""

    kind = ErrorKind.INTERNAL


class ConfigurationError(InternalError):
    """Required configuration (host, credentials) is missing."""
