"""CNS Python SDK

Compose, validate and push notifications to the IU Central Notification
Service.

Example:
    ```python
    from cns_sdk import CNSConfig, Notification, NotificationService

    notification = (
        Notification.create()
        .set_title("Outage")
        .set_summary("Email is down for scheduled maintenance")
        .set_type("service-alerts")
        .add_recipient("jdoe", "jdoe@iu.edu")
        .build()
    )

    config = CNSConfig(client_id="my-app", client_secret="s3cret")
    async with NotificationService.from_config(config) as service:
        await service.push_notification(notification)
    ```
"""

from .builder import NotificationBuilder
from .config import CNSConfig
from .exceptions import (
    AuthError,
    BuilderFinishedError,
    CNSError,
    ConfigError,
    LengthError,
    RangeError,
    TransportError,
    ValidationError,
)
from .models import AuthToken, Notification, Priority, Recipient, ValidationResult
from .service import NotificationService
from .transport import HttpTransportClient, TransportClient
from .validator import NotificationValidator

__version__ = "0.1.0"

__all__ = [
    # Builder / validation
    "NotificationBuilder",
    "NotificationValidator",
    "ValidationResult",
    # Models
    "AuthToken",
    "Notification",
    "Priority",
    "Recipient",
    # Delivery
    "CNSConfig",
    "HttpTransportClient",
    "NotificationService",
    "TransportClient",
    # Exceptions
    "AuthError",
    "BuilderFinishedError",
    "CNSError",
    "ConfigError",
    "LengthError",
    "RangeError",
    "TransportError",
    "ValidationError",
]
