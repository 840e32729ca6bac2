"""Unit tests for notification models."""

import pytest
from pydantic import ValidationError

from infrastructure.notifications.models import (
    Channel,
    NotificationStatus,
    ResolvedRecipient,
)
from tests.factories import make_notification, make_result


@pytest.mark.unit
class TestResolvedRecipient:
    def test_phone_number_separators_are_stripped(self):
        recipient = ResolvedRecipient(user_id="u", phone_number="+31 (6) 12-34.56 78")

        assert recipient.phone_number == "+31612345678"

    def test_blank_phone_number_becomes_none(self):
        assert ResolvedRecipient(user_id="u", phone_number=" - ").phone_number is None

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            ResolvedRecipient(user_id="u", email="not-an-email")

    def test_wants(self):
        recipient = ResolvedRecipient(user_id="u", channels={Channel.EMAIL})

        assert recipient.wants(Channel.EMAIL)
        assert not recipient.wants(Channel.WHATSAPP)

    def test_channels_from_strings(self):
        recipient = ResolvedRecipient(user_id="u", channels={"in_app", "whatsapp"})

        assert recipient.channels == {Channel.IN_APP, Channel.WHATSAPP}


@pytest.mark.unit
class TestNotification:
    @pytest.mark.parametrize("field", ["title", "message", "subject"])
    def test_blank_text_fields_are_rejected(self, field):
        with pytest.raises(ValidationError):
            make_notification(**{field: "  "})


@pytest.mark.unit
class TestNotificationResult:
    def test_is_success_only_when_sent(self):
        assert make_result(status=NotificationStatus.SENT).is_success
        assert not make_result(status=NotificationStatus.SKIPPED).is_success
        assert not make_result(status=NotificationStatus.FAILED).is_success
