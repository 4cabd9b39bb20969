"""Fluent builder for notifications."""

from datetime import tzinfo
from typing import Any

from .clock import (
    DEFAULT_TIMEZONE,
    Clock,
    ExpirationInput,
    aware_now,
    default_expiration,
    latest_expiration,
    to_expiration_instant,
    utc_now,
)
from .exceptions import BuilderFinishedError, LengthError, RangeError
from .limits import (
    MAX_EMAIL_LENGTH,
    MAX_EXPIRATION_DAYS,
    MAX_SMS_DESCRIPTION_LENGTH,
    MAX_SUMMARY_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_TYPE_NAME_LENGTH,
    MAX_URL_LENGTH,
    MAX_USERNAME_LENGTH,
)
from .models import Notification, Priority, Recipient


def _check_length(field: str, value: str, limit: int) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, not {type(value).__name__}")
    if len(value) > limit:
        raise LengthError(field, limit, len(value))
    return value


class NotificationBuilder:
    """
    Assemble a notification one field at a time.

    Every setter rejects an invalid value immediately, before it touches the
    draft, and returns the builder so calls can be chained. ``build()``
    freezes the draft into a ``Notification`` and retires the builder.

    Example:
        ```python
        notification = (
            NotificationBuilder()
            .set_title("Outage")
            .set_type("service-alerts")
            .add_recipient("jdoe", "jdoe@iu.edu")
            .flag_as_urgent()
            .build()
        )
        ```
    """

    def __init__(self, clock: Clock | None = None, tz: tzinfo | None = None) -> None:
        """
        Initialize a builder with an empty draft.

        Args:
            clock: Source of the current time. Defaults to the UTC wall clock.
                Naive times are read in ``tz``.
            tz: Zone for date-only expiration values and naive datetimes.
                Defaults to UTC.
        """
        self._clock = clock or utc_now
        self._tz = tz or DEFAULT_TIMEZONE
        self._fields: dict[str, Any] = {
            "priority": Priority.NORMAL,
            "expires_at": default_expiration(self._clock, self._tz),
        }
        self._recipients: list[Recipient] = []
        self._built = False

    def _set(self, name: str, value: Any) -> "NotificationBuilder":
        self._fields[name] = value
        return self

    def _ensure_open(self) -> None:
        if self._built:
            raise BuilderFinishedError()

    def set_title(self, title: str) -> "NotificationBuilder":
        """Set the title (at most 50 characters)."""
        self._ensure_open()
        return self._set("title", _check_length("title", title, MAX_TITLE_LENGTH))

    def set_summary(self, summary: str) -> "NotificationBuilder":
        """Set the summary text (at most 100 characters)."""
        self._ensure_open()
        return self._set(
            "summary", _check_length("summary", summary, MAX_SUMMARY_LENGTH)
        )

    def set_sms_description(self, sms_description: str) -> "NotificationBuilder":
        """Set the SMS description (at most 400 characters)."""
        self._ensure_open()
        return self._set(
            "sms_description",
            _check_length("sms_description", sms_description, MAX_SMS_DESCRIPTION_LENGTH),
        )

    def set_primary_action_url(self, url: str) -> "NotificationBuilder":
        """Set the primary call to action URL (at most 2000 characters)."""
        self._ensure_open()
        return self._set(
            "primary_action_url",
            _check_length("primary_action_url", url, MAX_URL_LENGTH),
        )

    def set_secondary_action_url(self, url: str) -> "NotificationBuilder":
        """Set the secondary call to action URL (at most 2000 characters)."""
        self._ensure_open()
        return self._set(
            "secondary_action_url",
            _check_length("secondary_action_url", url, MAX_URL_LENGTH),
        )

    def set_type(self, notification_type: str) -> "NotificationBuilder":
        """
        Set the notification type (at most 100 characters).

        The type must already be registered with the Central Notification
        Service; that cannot be checked locally.
        """
        self._ensure_open()
        return self._set(
            "notification_type",
            _check_length("notification_type", notification_type, MAX_TYPE_NAME_LENGTH),
        )

    def set_reply_to_email(self, email: str) -> "NotificationBuilder":
        """Set the reply-to email address (at most 100 characters)."""
        self._ensure_open()
        return self._set("reply_to", _check_length("reply_to", email, MAX_EMAIL_LENGTH))

    def add_recipient(self, username: str, email: str) -> "NotificationBuilder":
        """Append a recipient. Recipients are delivered in the order added."""
        self._ensure_open()
        recipient = Recipient(
            username=_check_length("recipient username", username, MAX_USERNAME_LENGTH),
            email=_check_length("recipient email", email, MAX_EMAIL_LENGTH),
        )
        self._recipients.append(recipient)
        return self

    def set_expiration_date(self, date: ExpirationInput) -> "NotificationBuilder":
        """
        Set when the notification expires.

        Args:
            date: A date, datetime or ISO 8601 string. Dates without a time
                mean start-of-day in the builder's zone.

        Raises:
            RangeError: If the instant is more than 30 days from now
        """
        self._ensure_open()
        expires_at = to_expiration_instant(date, self._tz)
        latest = latest_expiration(aware_now(self._clock, self._tz))
        if expires_at > latest:
            raise RangeError(expires_at, latest, MAX_EXPIRATION_DAYS)
        return self._set("expires_at", expires_at)

    def flag_as_urgent(self) -> "NotificationBuilder":
        """Raise the priority to URGENT."""
        self._ensure_open()
        return self._set("priority", Priority.URGENT)

    def snapshot(self) -> Notification:
        """Return the draft as it stands without finishing the builder."""
        return Notification(**self._fields, recipients=tuple(self._recipients))

    def build(self) -> Notification:
        """Return the finished notification. The builder cannot be used afterwards."""
        self._ensure_open()
        notification = self.snapshot()
        self._built = True
        return notification
