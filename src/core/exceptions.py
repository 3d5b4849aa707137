"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    GOAL_NOT_FOUND = "GOAL_NOT_FOUND"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_USERNAME = "INVALID_USERNAME"
    INVALID_TITLE = "INVALID_TITLE"
    INVALID_PROGRESS = "INVALID_PROGRESS"
    GOAL_TYPE_MISMATCH = "GOAL_TYPE_MISMATCH"
    SIGNUP_REJECTED = "SIGNUP_REJECTED"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Input rejected before any write was issued."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=422,
            details=details,
        )


class ConflictError(AppException):
    """Write would violate a uniqueness rule."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


class UsernameTakenError(ConflictError):
    """Username already belongs to another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message="Username is already taken",
            details={"username": username},
        )


class AuthError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class NotFoundError(AppException):
    """Requested record does not exist (or is not visible to the caller)."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {username}",
            details={"username": username},
        )


class GoalNotFoundError(NotFoundError):
    """Goal not found."""

    def __init__(self, goal_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GOAL_NOT_FOUND,
            message=f"Goal not found: {goal_id}",
            details={"goal_id": goal_id},
        )


class StoreError(AppException):
    """The record store failed for a reason other than a known conflict."""

    def __init__(self, message: str = "The record store could not complete the request") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=503,
        )


class IdentityProviderError(AppException):
    """The identity provider was unreachable or answered with a server error."""

    def __init__(self, message: str = "The identity provider is unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_PROVIDER_ERROR,
            message=message,
            status_code=502,
        )
