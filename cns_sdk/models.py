"""Data models for CNS SDK."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from .clock import Clock, default_expiration, to_unix_timestamp, utc_now
from .exceptions import ValidationError

if TYPE_CHECKING:
    from datetime import tzinfo

    from .builder import NotificationBuilder


class Priority(str, Enum):
    """Notification priority."""

    NORMAL = "NORMAL"
    URGENT = "URGENT"


class Recipient(BaseModel):
    """A single addressee of a notification."""

    username: str = Field(..., description="Recipient username")
    email: str = Field(..., description="Recipient email address")

    model_config = {"frozen": True}


class Notification(BaseModel):
    """
    A notification ready for validation and delivery.

    Instances are immutable. Use ``Notification.create()`` (or
    ``NotificationBuilder``) to assemble one field at a time with length
    checks applied as each value is set. Python attribute names are
    snake_case; ``to_payload()`` produces the service's camelCase wire format.
    """

    title: str | None = Field(None, description="Notification title")
    summary: str | None = Field(None, description="Summary text")
    sms_description: str | None = Field(
        None, alias="smsDescription", description="Text sent to SMS recipients"
    )
    priority: Priority = Field(default=Priority.NORMAL, description="Delivery priority")
    primary_action_url: str | None = Field(
        None, alias="primaryActionURL", description="Primary call to action URL"
    )
    secondary_action_url: str | None = Field(
        None, alias="secondaryActionURL", description="Secondary call to action URL"
    )
    notification_type: str | None = Field(
        None,
        alias="notificationType",
        description="Notification type registered with the service",
    )
    expires_at: datetime = Field(
        default_factory=lambda: default_expiration(utc_now),
        alias="expirationDate",
        description="Instant after which the notification is withdrawn",
    )
    reply_to: str | None = Field(
        None, alias="replyTo", description="Reply-to email address"
    )
    recipients: tuple[Recipient, ...] = Field(
        default=(), description="Recipients in delivery order"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("expires_at")
    @classmethod
    def ensure_aware(cls, value: datetime) -> datetime:
        # Naive expiration instants are taken as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: datetime) -> int:
        return to_unix_timestamp(value)

    @classmethod
    def create(
        cls, clock: Clock | None = None, tz: "tzinfo | None" = None
    ) -> "NotificationBuilder":
        """Start building a new notification through a fluent interface."""
        from .builder import NotificationBuilder

        return NotificationBuilder(clock=clock, tz=tz)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible request body for the notifications endpoint."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Return the request body as JSON text."""
        return self.model_dump_json(by_alias=True)


class AuthToken(BaseModel):
    """OAuth2 access token returned by the token endpoint."""

    access_token: str = Field(..., description="Bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int | None = Field(None, description="Token lifetime in seconds")
    scope: str | None = Field(None, description="Granted scope")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a notification."""

    messages: tuple[str, ...] = ()

    def is_valid(self) -> bool:
        """Return True if no violations were recorded."""
        return not self.messages

    def errors(self) -> tuple[str, ...]:
        """Return every recorded violation in check order."""
        return self.messages

    def raise_for_errors(self) -> None:
        """Raise ValidationError if any violation was recorded."""
        if self.messages:
            raise ValidationError(self.messages)

    def __bool__(self) -> bool:
        return self.is_valid()
