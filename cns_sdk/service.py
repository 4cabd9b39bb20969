"""Notification delivery orchestration."""

from typing import Any

import structlog

from .config import CNSConfig
from .models import Notification
from .transport import HttpTransportClient, TransportClient
from .validator import NotificationValidator

logger = structlog.get_logger(__name__)


class NotificationService:
    """
    Push notifications to the Central Notification Service.

    Every notification is validated first. Invalid notifications raise
    ``ValidationError`` and never reach the transport. Authentication and
    transport errors propagate unchanged and are not retried.

    Example:
        ```python
        config = CNSConfig.from_env()
        async with NotificationService.from_config(config) as service:
            await service.push_notification(notification)
        ```
    """

    def __init__(
        self,
        transport: TransportClient,
        validator: NotificationValidator | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            transport: Transport used to authenticate and deliver
            validator: Validator gating submission. Defaults to a validator
                on the UTC wall clock.
        """
        self.transport = transport
        self.validator = validator or NotificationValidator()

    @classmethod
    def from_config(cls, config: CNSConfig) -> "NotificationService":
        """Create a service backed by the HTTPS transport."""
        return cls(HttpTransportClient(config))

    async def __aenter__(self) -> "NotificationService":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.close()

    async def push_notification(self, notification: Notification) -> None:
        """
        Validate and deliver a notification.

        Args:
            notification: Notification to push

        Raises:
            ValidationError: If the notification fails validation
            AuthError: If no token could be obtained
            TransportError: If the service rejected the notification
        """
        result = self.validator.validate(notification)
        if not result.is_valid():
            logger.warning(
                "Notification failed validation",
                error_count=len(result.errors()),
                errors=list(result.errors()),
            )
            result.raise_for_errors()

        token = await self.transport.fetch_auth_token()
        await self.transport.submit(notification, token)
        logger.info(
            "Notification pushed",
            notification_type=notification.notification_type,
            priority=notification.priority.value,
            recipient_count=len(notification.recipients),
        )
