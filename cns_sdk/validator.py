"""Final structural validation of notifications before submission."""

from datetime import tzinfo

import structlog

from .clock import DEFAULT_TIMEZONE, Clock, aware_now, latest_expiration, utc_now
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
from .models import Notification, ValidationResult

logger = structlog.get_logger(__name__)


class NotificationValidator:
    """
    Check a finished notification against every field rule.

    Unlike the builder, the validator never stops at the first problem: it
    collects one message per violation so the whole list can be shown to
    whoever composed the notification. Each call returns a new
    ``ValidationResult``; nothing is kept between calls.
    """

    def __init__(self, clock: Clock | None = None, tz: tzinfo | None = None) -> None:
        """
        Initialize the validator.

        Args:
            clock: Source of the current time. Defaults to the UTC wall clock.
            tz: Zone for naive times returned by ``clock``. Defaults to UTC.
        """
        self._clock = clock or utc_now
        self._tz = tz or DEFAULT_TIMEZONE

    def validate(self, notification: Notification) -> ValidationResult:
        """
        Validate a notification.

        Args:
            notification: Notification to validate

        Returns:
            ValidationResult listing every violation in check order
        """
        errors: list[str] = []

        _check_length(errors, "title", notification.title, MAX_TITLE_LENGTH)
        _check_length(errors, "summary", notification.summary, MAX_SUMMARY_LENGTH)
        _check_length(
            errors,
            "sms_description",
            notification.sms_description,
            MAX_SMS_DESCRIPTION_LENGTH,
        )
        _check_length(
            errors, "primary_action_url", notification.primary_action_url, MAX_URL_LENGTH
        )
        _check_length(
            errors,
            "secondary_action_url",
            notification.secondary_action_url,
            MAX_URL_LENGTH,
        )
        _check_length(
            errors,
            "notification_type",
            notification.notification_type,
            MAX_TYPE_NAME_LENGTH,
        )
        _check_length(errors, "reply_to", notification.reply_to, MAX_EMAIL_LENGTH)

        latest = latest_expiration(aware_now(self._clock, self._tz))
        if notification.expires_at > latest:
            errors.append(
                f"expiration date {notification.expires_at.isoformat()} exceeds "
                f"max expiration time of {MAX_EXPIRATION_DAYS} days"
            )

        if not notification.recipients:
            errors.append("No recipients set for notification")

        for position, recipient in enumerate(notification.recipients, start=1):
            _check_length(
                errors,
                f"recipient {position} username",
                recipient.username,
                MAX_USERNAME_LENGTH,
            )
            _check_length(
                errors, f"recipient {position} email", recipient.email, MAX_EMAIL_LENGTH
            )

        logger.debug(
            "Notification validated",
            error_count=len(errors),
            recipient_count=len(notification.recipients),
        )
        return ValidationResult(tuple(errors))


def _check_length(errors: list[str], field: str, value: str | None, limit: int) -> None:
    if value is not None and len(value) > limit:
        errors.append(
            f"{field} exceeds max length of {limit} characters (got {len(value)})"
        )
