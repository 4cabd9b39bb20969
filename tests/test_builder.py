"""Tests for NotificationBuilder."""

from datetime import date, datetime, timedelta, timezone

import pytest

from cns_sdk import (
    BuilderFinishedError,
    LengthError,
    Notification,
    NotificationBuilder,
    Priority,
    RangeError,
    Recipient,
)
from tests.conftest import NOW

# (setter, attribute, limit)
STRING_FIELDS = [
    ("set_title", "title", 50),
    ("set_summary", "summary", 100),
    ("set_sms_description", "sms_description", 400),
    ("set_primary_action_url", "primary_action_url", 2000),
    ("set_secondary_action_url", "secondary_action_url", 2000),
    ("set_type", "notification_type", 100),
    ("set_reply_to_email", "reply_to", 100),
]


class TestStringFields:
    """Tests for the length-limited setters."""

    @pytest.mark.parametrize("setter,attribute,limit", STRING_FIELDS)
    def test_value_at_limit_is_stored_exactly(self, builder, setter, attribute, limit):
        """A value of exactly the limit is stored unchanged."""
        value = "é" * (limit - 1) + "x"
        getattr(builder, setter)(value)
        assert getattr(builder.snapshot(), attribute) == value

    @pytest.mark.parametrize("setter,attribute,limit", STRING_FIELDS)
    def test_value_over_limit_is_rejected(self, builder, setter, attribute, limit):
        """A value one over the limit raises and leaves the draft untouched."""
        getattr(builder, setter)("original")
        before = builder.snapshot()

        with pytest.raises(LengthError) as exc_info:
            getattr(builder, setter)("x" * (limit + 1))

        assert exc_info.value.limit == limit
        assert exc_info.value.length == limit + 1
        assert builder.snapshot() == before
        assert getattr(builder.snapshot(), attribute) == "original"

    @pytest.mark.parametrize("setter,attribute,limit", STRING_FIELDS)
    def test_setters_return_builder(self, builder, setter, attribute, limit):
        """Every setter returns the builder for chaining."""
        assert getattr(builder, setter)("value") is builder

    def test_length_error_is_value_error(self, builder):
        """LengthError can be caught as a ValueError."""
        with pytest.raises(ValueError, match="title cannot exceed 50 characters"):
            builder.set_title("x" * 51)

    def test_non_string_rejected(self, builder):
        """Non-string values are rejected."""
        with pytest.raises(TypeError, match="title must be a string"):
            builder.set_title(42)

    def test_empty_string_allowed(self, builder):
        """Empty strings are within every limit."""
        builder.set_summary("")
        assert builder.snapshot().summary == ""


class TestTitleBoundary:
    """Round trip at the title boundary."""

    def test_fifty_character_title_builds_and_validates(self, builder, validator):
        """A 50-character title passes both the builder and the validator."""
        notification = (
            builder.set_title("t" * 50).add_recipient("jdoe", "jdoe@iu.edu").build()
        )
        assert validator.validate(notification).is_valid()

    def test_fifty_one_character_title_fails_at_build_time(self, builder):
        """A 51-character title is rejected by the builder."""
        with pytest.raises(LengthError):
            builder.set_title("t" * 51)


class TestRecipients:
    """Tests for add_recipient."""

    def test_recipients_keep_call_order(self, builder):
        """Recipients appear in the order they were added."""
        builder.add_recipient("b", "b@iu.edu").add_recipient("a", "a@iu.edu")
        builder.add_recipient("c", "c@iu.edu")

        recipients = builder.snapshot().recipients
        assert [r.username for r in recipients] == ["b", "a", "c"]
        assert recipients[0] == Recipient(username="b", email="b@iu.edu")

    def test_duplicate_recipients_are_kept(self, builder):
        """Adding the same recipient twice keeps both entries."""
        builder.add_recipient("jdoe", "jdoe@iu.edu").add_recipient("jdoe", "jdoe@iu.edu")
        assert len(builder.snapshot().recipients) == 2

    def test_username_too_long(self, builder):
        """A username over 100 characters is rejected."""
        with pytest.raises(LengthError, match="recipient username"):
            builder.add_recipient("u" * 101, "jdoe@iu.edu")
        assert builder.snapshot().recipients == ()

    def test_email_too_long(self, builder):
        """An email over 100 characters is rejected without adding anything."""
        builder.add_recipient("jdoe", "jdoe@iu.edu")
        with pytest.raises(LengthError, match="recipient email"):
            builder.add_recipient("asmith", "e" * 101)
        assert len(builder.snapshot().recipients) == 1

    def test_limits_are_inclusive(self, builder):
        """Username and email of exactly 100 characters are accepted."""
        builder.add_recipient("u" * 100, "e" * 100)
        assert builder.snapshot().recipients[0].username == "u" * 100


class TestExpiration:
    """Tests for set_expiration_date and the default expiration."""

    def test_default_is_thirty_days_from_clock(self, builder):
        """A new draft expires 30 days after the clock's time."""
        assert builder.snapshot().expires_at == NOW + timedelta(days=30)

    def test_date_means_start_of_day_utc(self, builder):
        """A plain date resolves to midnight UTC."""
        builder.set_expiration_date(date(2026, 1, 25))
        assert builder.snapshot().expires_at == datetime(
            2026, 1, 25, tzinfo=timezone.utc
        )

    def test_date_uses_builder_timezone(self, clock):
        """A plain date resolves to midnight in the builder's zone."""
        eastern = timezone(timedelta(hours=-5))
        builder = NotificationBuilder(clock=clock, tz=eastern)
        builder.set_expiration_date(date(2026, 1, 25))

        expires_at = builder.snapshot().expires_at
        assert expires_at == datetime(2026, 1, 25, 5, tzinfo=timezone.utc)

    def test_naive_datetime_uses_builder_timezone(self, clock):
        """A naive datetime is read in the builder's zone."""
        eastern = timezone(timedelta(hours=-5))
        builder = NotificationBuilder(clock=clock, tz=eastern)
        builder.set_expiration_date(datetime(2026, 1, 25, 9, 0))

        expires_at = builder.snapshot().expires_at
        assert expires_at == datetime(2026, 1, 25, 14, tzinfo=timezone.utc)

    def test_iso_string_with_z_suffix(self, builder):
        """A trailing Z marks a UTC timestamp."""
        builder.set_expiration_date("2026-01-25T06:30:00Z")
        assert builder.snapshot().expires_at == datetime(
            2026, 1, 25, 6, 30, tzinfo=timezone.utc
        )

    def test_iso_string(self, builder):
        """ISO date strings are accepted."""
        builder.set_expiration_date("2026-01-25")
        assert builder.snapshot().expires_at == datetime(
            2026, 1, 25, tzinfo=timezone.utc
        )

    def test_invalid_string(self, builder):
        """Non-ISO strings are rejected."""
        with pytest.raises(ValueError, match="Invalid expiration date"):
            builder.set_expiration_date("next tuesday")

    def test_aware_datetime_kept(self, builder):
        """Aware datetimes are stored as given."""
        expires_at = NOW + timedelta(days=3, hours=4)
        builder.set_expiration_date(expires_at)
        assert builder.snapshot().expires_at == expires_at

    def test_ten_days_out_accepted(self, builder):
        """An expiration 10 days out is accepted."""
        builder.set_expiration_date((NOW + timedelta(days=10)).date())
        assert builder.snapshot().expires_at.date() == date(2026, 1, 25)

    def test_forty_five_days_out_rejected(self, builder):
        """An expiration 45 days out raises before the draft changes."""
        before = builder.snapshot()

        with pytest.raises(RangeError, match="no more than 30 days"):
            builder.set_expiration_date((NOW + timedelta(days=45)).date())

        assert builder.snapshot() == before

    def test_exact_window_edge(self, builder):
        """Exactly 30 days is allowed, one second more is not."""
        builder.set_expiration_date(NOW + timedelta(days=30))
        with pytest.raises(RangeError):
            builder.set_expiration_date(NOW + timedelta(days=30, seconds=1))

    def test_past_date_accepted(self, builder):
        """Only the upper bound is enforced."""
        builder.set_expiration_date(NOW - timedelta(days=1))
        assert builder.snapshot().expires_at == NOW - timedelta(days=1)

    def test_unsupported_type(self, builder):
        """Integers are not an expiration date."""
        with pytest.raises(TypeError):
            builder.set_expiration_date(1767225600)


class TestPriorityAndBuild:
    """Tests for flag_as_urgent and build."""

    def test_priority_defaults_to_normal(self, builder):
        """Drafts start at NORMAL priority."""
        assert builder.snapshot().priority is Priority.NORMAL

    def test_flag_as_urgent_returns_builder(self, builder):
        """flag_as_urgent chains like every other setter."""
        assert builder.flag_as_urgent() is builder
        assert builder.build().priority is Priority.URGENT

    def test_full_chain(self, clock):
        """A complete fluent chain produces a populated notification."""
        notification = (
            Notification.create(clock=clock)
            .set_title("Outage")
            .set_summary("Email is down")
            .set_sms_description("Email is down until 5pm")
            .set_primary_action_url("https://status.iu.edu")
            .set_secondary_action_url("https://kb.iu.edu")
            .set_type("service-alerts")
            .set_reply_to_email("help@iu.edu")
            .add_recipient("jdoe", "jdoe@iu.edu")
            .flag_as_urgent()
            .build()
        )

        assert isinstance(notification, Notification)
        assert notification.title == "Outage"
        assert notification.reply_to == "help@iu.edu"
        assert notification.priority is Priority.URGENT
        assert notification.expires_at == NOW + timedelta(days=30)

    def test_builder_cannot_be_reused(self, builder):
        """Setters and build fail once the builder is finished."""
        builder.set_title("Outage").build()

        with pytest.raises(BuilderFinishedError):
            builder.set_title("Again")
        with pytest.raises(BuilderFinishedError):
            builder.build()

    def test_built_notification_is_detached(self, builder):
        """The built value does not share the builder's recipient list."""
        builder.add_recipient("jdoe", "jdoe@iu.edu")
        notification = builder.build()
        assert isinstance(notification.recipients, tuple)


class TestNaiveClock:
    """Builders whose clock returns naive datetimes."""

    def test_naive_clock_read_as_utc(self):
        """A naive clock is taken to be UTC by default."""
        builder = NotificationBuilder(clock=lambda: NOW.replace(tzinfo=None))

        assert builder.snapshot().expires_at == NOW + timedelta(days=30)
        builder.set_expiration_date((NOW + timedelta(days=10)).date())
        with pytest.raises(RangeError):
            builder.set_expiration_date((NOW + timedelta(days=45)).date())

    def test_naive_clock_read_in_builder_timezone(self):
        """A naive clock is read in the builder's zone."""
        eastern = timezone(timedelta(hours=-5))
        builder = NotificationBuilder(
            clock=lambda: datetime(2026, 1, 15, 7, 0), tz=eastern
        )
        assert builder.snapshot().expires_at == NOW + timedelta(days=30)

    def test_datetime_now_as_clock(self):
        """datetime.now can be passed straight in as the clock."""
        builder = NotificationBuilder(clock=datetime.now)
        builder.set_expiration_date(date.today() + timedelta(days=3))
        assert builder.snapshot().expires_at.tzinfo is not None
