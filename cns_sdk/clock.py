"""Time helpers for notification expiration.

All "now" lookups go through a ``Clock`` so callers and tests can pin the
current time instead of relying on the wall clock.
"""

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from .limits import MAX_EXPIRATION_DAYS

Clock = Callable[[], datetime]

# Date-only expiration values mean start-of-day in this zone.
DEFAULT_TIMEZONE: tzinfo = timezone.utc

ExpirationInput = date | datetime | str


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def aware_now(clock: Clock, tz: tzinfo = DEFAULT_TIMEZONE) -> datetime:
    """Read ``clock``, taking a naive result to be in ``tz``."""
    now = clock()
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now


def latest_expiration(now: datetime, days: int = MAX_EXPIRATION_DAYS) -> datetime:
    """Return the latest expiration instant accepted at ``now``."""
    return now + timedelta(days=days)


def default_expiration(clock: Clock, tz: tzinfo = DEFAULT_TIMEZONE) -> datetime:
    """Return the expiration given to notifications that never set one."""
    return latest_expiration(aware_now(clock, tz))


def to_expiration_instant(value: ExpirationInput, tz: tzinfo = DEFAULT_TIMEZONE) -> datetime:
    """
    Resolve an expiration value to an aware datetime.

    Args:
        value: A date, a datetime, or an ISO 8601 string (``YYYY-MM-DD`` or a
            full timestamp)
        tz: Zone used for date-only values and naive datetimes

    Returns:
        Timezone-aware expiration instant

    Raises:
        TypeError: If value is not a supported type
        ValueError: If a string value is not ISO 8601
    """
    if isinstance(value, str):
        try:
            text = value.strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid expiration date: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tz)

    raise TypeError(
        f"Expiration date must be a date, datetime or ISO string, not {type(value).__name__}"
    )


def to_unix_timestamp(value: datetime) -> int:
    """Return ``value`` as whole seconds since the epoch."""
    return int(value.timestamp())
