"""Pytest configuration for CNS SDK tests."""

from datetime import datetime, timedelta, timezone

import pytest

from cns_sdk import Notification, NotificationBuilder, NotificationValidator, Recipient

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def configure_structlog():
    """Configure structlog for testing."""
    import structlog

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@pytest.fixture
def clock():
    """A clock pinned to NOW."""
    return lambda: NOW


@pytest.fixture
def builder(clock):
    """A builder on the fixed clock."""
    return NotificationBuilder(clock=clock)


@pytest.fixture
def validator(clock):
    """A validator on the fixed clock."""
    return NotificationValidator(clock=clock)


@pytest.fixture
def make_notification():
    """Build Notification values directly, bypassing the builder's checks."""

    def _make(**overrides):
        fields = {
            "title": "Outage",
            "notification_type": "service-alerts",
            "expires_at": NOW + timedelta(days=10),
            "recipients": (Recipient(username="jdoe", email="jdoe@iu.edu"),),
        }
        fields.update(overrides)
        return Notification(**fields)

    return _make
