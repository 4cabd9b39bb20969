"""Exceptions for CNS SDK."""

from datetime import datetime


class CNSError(Exception):
    """Base exception for all CNS SDK errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Initialize CNSError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigError(CNSError):
    """Raised when client configuration is invalid."""


class LengthError(CNSError, ValueError):
    """Raised when a field value exceeds its maximum character length."""

    def __init__(self, field: str, limit: int, length: int) -> None:
        """
        Initialize LengthError.

        Args:
            field: Name of the offending field
            limit: Maximum allowed length in characters
            length: Actual length of the rejected value
        """
        self.field = field
        self.limit = limit
        self.length = length
        super().__init__(f"{field} cannot exceed {limit} characters (got {length})")


class RangeError(CNSError, ValueError):
    """Raised when an expiration date falls outside the permitted window."""

    def __init__(self, expires_at: datetime, latest: datetime, max_days: int) -> None:
        """
        Initialize RangeError.

        Args:
            expires_at: Rejected expiration instant
            latest: Latest instant that would have been accepted
            max_days: Size of the expiration window in days
        """
        self.expires_at = expires_at
        self.latest = latest
        super().__init__(
            f"Expiration date must be no more than {max_days} days into the future"
        )


class BuilderFinishedError(CNSError):
    """Raised when a builder is used again after build()."""

    def __init__(self, message: str = "Notification has already been built") -> None:
        """Initialize BuilderFinishedError."""
        super().__init__(message)


class ValidationError(CNSError):
    """Raised when a notification fails validation before submission."""

    def __init__(self, errors: list[str] | tuple[str, ...]) -> None:
        """
        Initialize ValidationError.

        Args:
            errors: Every violation found, in check order
        """
        self.errors = tuple(errors)
        super().__init__("Notification failed validation: " + "; ".join(self.errors))


class AuthError(CNSError):
    """Raised when an authentication token cannot be obtained."""

    def __init__(
        self, message: str = "Authentication failed", status_code: int | None = 401
    ) -> None:
        """Initialize AuthError."""
        super().__init__(message, status_code=status_code)


class TransportError(CNSError):
    """Raised when a notification cannot be delivered to the service."""
