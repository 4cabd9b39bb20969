"""
Mock transport for testing.

Provides an in-memory implementation of TransportClient for testing
without contacting the Central Notification Service.
"""

import uuid
from typing import Any

from .exceptions import AuthError, TransportError
from .models import AuthToken, Notification
from .transport import TransportClient


def auth_token_factory(**kwargs: Any) -> AuthToken:
    """Create a test AuthToken."""
    return AuthToken(
        access_token=kwargs.get("access_token", f"tok_{uuid.uuid4().hex[:24]}"),
        token_type=kwargs.get("token_type", "bearer"),
        expires_in=kwargs.get("expires_in", 3600),
        scope=kwargs.get("scope"),
    )


class MockTransportClient(TransportClient):
    """Mock transport for testing.

    Records every submitted payload and issued token.

    Example:
        transport = MockTransportClient()
        service = NotificationService(transport)
        await service.push_notification(notification)
        assert transport.submitted[0]["title"] == "Outage"
    """

    def __init__(self) -> None:
        """Initialize the mock transport."""
        self.submitted: list[dict[str, Any]] = []
        self.tokens: list[AuthToken] = []
        self.closed = False

        # Control flags for testing error scenarios
        self._auth_failure: str | None = None
        self._submit_failure: tuple[str, int | None] | None = None

    # Control methods for testing

    def set_auth_failure(self, message: str | None = "Invalid client credentials") -> None:
        """Make every token fetch fail until reset with None."""
        self._auth_failure = message

    def set_submit_failure(
        self, message: str | None = "Mock failure", status_code: int | None = 500
    ) -> None:
        """Make every submission fail until reset with None."""
        self._submit_failure = (message, status_code) if message is not None else None

    def clear(self) -> None:
        """Clear all recorded data."""
        self.submitted.clear()
        self.tokens.clear()

    async def fetch_auth_token(self) -> AuthToken:
        """Issue a mock token."""
        if self._auth_failure is not None:
            raise AuthError(self._auth_failure)
        token = auth_token_factory()
        self.tokens.append(token)
        return token

    async def submit(self, notification: Notification, token: AuthToken) -> None:
        """Record the notification payload."""
        if token not in self.tokens:
            raise TransportError("Unknown bearer token", status_code=401)
        if self._submit_failure is not None:
            message, status_code = self._submit_failure
            raise TransportError(message, status_code=status_code)
        self.submitted.append(notification.to_payload())

    async def close(self) -> None:
        """Mark the transport closed."""
        self.closed = True
