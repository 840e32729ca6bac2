"""Shared fixtures for the test suite."""

from typing import Dict, Iterable, Optional
from unittest.mock import MagicMock

import pytest
import structlog

from infrastructure.configuration import Settings
from infrastructure.identity.models import IdentityProfile
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import (
    Channel,
    NotificationResult,
    NotificationStatus,
)
from infrastructure.operations import OperationResult, OperationStatus
from tests.factories import (
    make_incident,
    make_notification,
    make_profile,
    make_recipient,
    make_rule,
    make_rule_row,
)


@pytest.fixture(autouse=True)
def clear_log_context():
    """Start and end every test with an empty structlog context."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def mock_settings():
    """Mock Settings with every integration configured.

    Returns:
        MagicMock shaped like Settings with smtp, twilio, clerk, aws and
        notifications groups
    """
    settings = MagicMock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.is_production = False

    settings.clerk = MagicMock()
    settings.clerk.CLERK_SECRET_KEY = "sk_test_123"
    settings.clerk.CLERK_API_URL = "https://api.clerk.com/v1"
    settings.clerk.CLERK_TIMEOUT_SECONDS = 10

    settings.twilio = MagicMock()
    settings.twilio.TWILIO_ACCOUNT_SID = "AC123"
    settings.twilio.TWILIO_AUTH_TOKEN = "twilio-token"
    settings.twilio.TWILIO_WHATSAPP_NUMBER = "+14155238886"
    settings.twilio.TWILIO_API_URL = "https://api.twilio.com/2010-04-01"
    settings.twilio.TWILIO_TIMEOUT_SECONDS = 10
    settings.twilio.is_configured = True

    settings.smtp = MagicMock()
    settings.smtp.SMTP_HOST = "smtp.example.com"
    settings.smtp.SMTP_PORT = 587
    settings.smtp.SMTP_USER = "alerts@example.com"
    settings.smtp.SMTP_PASSWORD = "smtp-password"
    settings.smtp.SMTP_SECURE = False
    settings.smtp.SMTP_FROM_NAME = "AI Group Platform"
    settings.smtp.SMTP_TIMEOUT_SECONDS = 30
    settings.smtp.sender_address = "alerts@example.com"
    settings.smtp.is_configured = True

    settings.aws = MagicMock()
    settings.aws.AWS_REGION = "eu-west-1"
    settings.aws.DYNAMODB_ENDPOINT_URL = None

    settings.notifications = MagicMock()
    settings.notifications.base_url = "https://app.example.com"
    settings.notifications.INCIDENT_PATH_TEMPLATE = "/dashboard/ai-safety/{incident_id}"
    settings.notifications.DISPATCH_MODE = "sync"
    settings.notifications.MAX_RECIPIENT_WORKERS = 4
    settings.notifications.DEDUPLICATE_DISPATCH = False
    settings.notifications.IDEMPOTENCY_TTL_SECONDS = 3600
    settings.notifications.IDEMPOTENCY_TABLE = "idempotency"
    return settings


@pytest.fixture
def incident_factory():
    """Factory for Incident snapshots, see tests.factories.make_incident."""
    return make_incident


@pytest.fixture
def rule_factory():
    """Factory for validated NotificationRule instances."""
    return make_rule


@pytest.fixture
def rule_row_factory():
    """Factory for persisted rule rows."""
    return make_rule_row


@pytest.fixture
def recipient_factory():
    """Factory for ResolvedRecipient instances."""
    return make_recipient


@pytest.fixture
def notification_factory():
    """Factory for Notification instances."""
    return make_notification


@pytest.fixture
def profile_factory():
    """Factory for IdentityProfile instances."""
    return make_profile


@pytest.fixture
def identity_factory():
    """Factory for a mock IdentityService backed by a profile mapping.

    Unknown ids resolve to NOT_FOUND; ids listed in ``failing`` raise.

    Example:
        identity = identity_factory({"user_1": make_profile("user_1")})
    """

    def _factory(
        profiles: Optional[Dict[str, IdentityProfile]] = None,
        failing: Iterable[str] = (),
    ) -> MagicMock:
        profiles = dict(profiles or {})
        failing = set(failing)

        def _get_user(user_id: str) -> OperationResult:
            if user_id in failing:
                raise ConnectionError(f"identity provider down for {user_id}")
            if user_id in profiles:
                return OperationResult.success(data=profiles[user_id])
            return OperationResult.error(
                OperationStatus.NOT_FOUND, "not found", error_code="NOT_FOUND"
            )

        identity = MagicMock()
        identity.get_user.side_effect = _get_user
        return identity

    return _factory


@pytest.fixture
def channel_factory():
    """Factory for mock channels that report SENT unless told otherwise.

    Example:
        email = channel_factory(Channel.EMAIL, error=RuntimeError("smtp down"))
    """

    def _factory(
        name: Channel,
        configured: bool = True,
        status: NotificationStatus = NotificationStatus.SENT,
        error: Optional[Exception] = None,
        healthy: bool = True,
    ) -> MagicMock:
        channel = MagicMock(spec=NotificationChannel)
        channel.channel_name = name
        channel.is_configured.return_value = configured

        def _send(notification, recipient):
            if error is not None:
                raise error
            return NotificationResult(
                channel=name,
                recipient_id=recipient.user_id,
                status=status,
                message=status.value,
            )

        channel.send.side_effect = _send
        channel.health_check.return_value = (
            OperationResult.success()
            if healthy
            else OperationResult.transient_error("down")
        )
        return channel

    return _factory


@pytest.fixture
def all_channels(channel_factory):
    return {channel: channel_factory(channel) for channel in Channel}
