"""Domain errors raised by services and rendered by the API layer."""

from fastapi import status


class TaskboardError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(TaskboardError):
    """A unique field is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class AuthError(TaskboardError):
    """Bad credentials, bad OTP, or inactive account at login time."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthorized(AuthError):
    """A protected route was called without a usable session."""

    default_message = "Authentication required"


class Forbidden(TaskboardError):
    """The caller's role does not allow the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(TaskboardError):
    """Entity is absent or not visible to the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DeliveryError(TaskboardError):
    """The email transport reported a failure."""

    default_message = "Failed to send email"


class InternalError(TaskboardError):
    """Unexpected store or transport failure; its detail is never shown to callers."""


class TokenError(Exception):
    """Base class for session token decoding failures."""

    message = "Invalid token"


class InvalidTokenError(TokenError):
    """Signature mismatch, malformed token, or missing claims."""


class ExpiredTokenError(TokenError):
    """Well-formed token past its expiry."""

    message = "Token expired"
