"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    GITHUB_PROFILE_NOT_FOUND = "GITHUB_PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    POST_ALREADY_LIKED = "POST_ALREADY_LIKED"
    POST_NOT_LIKED = "POST_NOT_LIKED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


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


class AuthenticationError(AppException):
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


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair did not match a user."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid credentials",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ValidationFailedError(AppException):
    """Input failed a business-level validation rule."""

    def __init__(
        self, field: str, message: str, *, more: dict[str, str] | None = None
    ) -> None:
        errors = {field: message, **(more or {})}
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=[
                {"field": name, "message": text, "type": "value_error"}
                for name, text in errors.items()
            ],
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class UserAlreadyExistsError(AppException):
    """A user with this email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="User already exists",
            status_code=409,
            details={"email": email},
        )


class ProfileNotFoundError(AppException):
    """No profile for the given user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="There is no profile for this user",
            status_code=404,
            details={"user_id": user_id},
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message="Post not found",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message="Comment does not exist",
            status_code=404,
            details={"comment_id": comment_id},
        )


class PostAlreadyLikedError(AppException):
    """The user already liked this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_ALREADY_LIKED,
            message="Post already liked",
            status_code=409,
            details={"post_id": post_id},
        )


class PostNotLikedError(AppException):
    """The user has not liked this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_LIKED,
            message="Post has not yet been liked",
            status_code=409,
            details={"post_id": post_id},
        )


class ConcurrentModificationError(AppException):
    """The document changed between load and write."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message=f"The {kind} was modified concurrently, retry the request",
            status_code=409,
            details={f"{kind}_id": entity_id},
        )


class GitHubProfileNotFoundError(AppException):
    """GitHub has no public profile for the username."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_PROFILE_NOT_FOUND,
            message="No GitHub profile found",
            status_code=404,
            details={"username": username},
        )
