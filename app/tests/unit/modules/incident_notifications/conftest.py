"""Fixtures for incident notification tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications import NotificationService
from modules.incident_notifications.domain.models import LegacyRecipient
from modules.incident_notifications.infrastructure import (
    InMemoryMembershipStore,
    InMemoryNotificationRecordStore,
    InMemoryPhoneOverrideStore,
    InMemoryRuleStore,
)
from tests.factories import make_profile


@pytest.fixture
def profiles():
    """Identity profiles of a small organization."""
    return {
        "user_a": make_profile("user_a", email="a@example.com", phone="+31611111111"),
        "user_b": make_profile("user_b", email="b@example.com"),
        "user_c": make_profile("user_c", email="c@example.com", phone="+31633333333"),
        "user_d": make_profile("user_d", email=None),
    }


@pytest.fixture
def identity(identity_factory, profiles):
    return identity_factory(profiles)


@pytest.fixture
def membership_store():
    return InMemoryMembershipStore(
        project_members={3: ["user_a", "user_b"], 4: ["user_c"]},
        organization_members={
            7: [
                ("user_a", "active"),
                ("user_b", "inactive"),
                ("user_c", None),
                ("user_d", "active"),
            ],
        },
    )


@pytest.fixture
def phone_override_store():
    return InMemoryPhoneOverrideStore(
        [
            LegacyRecipient(user_id="user_b", phone_number="+31622222222"),
            LegacyRecipient(user_id="user_x", phone_number=None, enabled=False),
        ]
    )


@pytest.fixture
def rule_store():
    return InMemoryRuleStore()


@pytest.fixture
def record_store():
    return InMemoryNotificationRecordStore()


@pytest.fixture
def mock_notifications():
    """NotificationService mock echoing nothing back."""
    service = MagicMock(spec=NotificationService)
    service.dispatch.return_value = []
    return service
