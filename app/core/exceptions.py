"""Custom exceptions for the Movian backend.

These exceptions provide structured error handling that:
- Separates internal details from user-facing messages
- Carries the HTTP status the failure maps to
- Maintains security by not leaking implementation details
"""


class MovianError(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(self, message: str, user_message: str | None = None):
        """
        Initialize application error.

        Args:
            message: Internal error message for logging/debugging
            user_message: Safe message to show to users (defaults to generic message)
        """
        super().__init__(message)
        self.user_message = user_message or "Server error"


class AuthRequiredError(MovianError):
    """No credentials were presented."""

    status_code = 401

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(
            message,
            user_message or "Authentication required. Please log in.",
        )


class AuthInvalidError(MovianError):
    """Credentials were presented but are malformed, expired or of the wrong kind."""

    status_code = 401

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(
            message,
            user_message or "Invalid token. Login required.",
        )


class ForbiddenError(MovianError):
    """Identity is valid but not allowed to perform the action."""

    status_code = 403

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(
            message,
            user_message or "Not authorized",
        )


class NotFoundError(MovianError):
    """Referenced entity does not exist."""

    status_code = 404

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(
            message,
            user_message or "Not found",
        )


class ValidationError(MovianError):
    """Missing or malformed input."""

    status_code = 400

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(
            message,
            user_message or message,
        )


class UpstreamError(MovianError):
    """A third-party dependency (OMDb, YouTube) failed or timed out."""

    status_code = 502

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(
            message,
            user_message or "Upstream service unavailable. Please try again.",
        )
