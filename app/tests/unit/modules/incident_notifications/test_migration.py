"""Unit tests for the legacy critical-recipient migration."""

import json
from unittest.mock import MagicMock

import pytest

from infrastructure.operations import OperationResult
from modules.incident_notifications.domain.models import LegacyRecipient
from modules.incident_notifications.infrastructure import (
    InMemoryPhoneOverrideStore,
    InMemoryRuleStore,
)
from modules.incident_notifications.migration import (
    MIGRATED_BY,
    legacy_rule_row,
    migrate_critical_recipients_to_rules,
)
from modules.incident_notifications.rules import parse_rule_row
from tests.factories import make_rule_row


@pytest.fixture
def legacy_store():
    return InMemoryPhoneOverrideStore(
        [
            LegacyRecipient(user_id="user_a", phone_number="+31611111111"),
            LegacyRecipient(user_id="user_b"),
            LegacyRecipient(user_id="user_c", enabled=False),
        ]
    )


@pytest.mark.unit
class TestLegacyRuleRow:
    def test_with_phone(self):
        row = legacy_rule_row(LegacyRecipient(user_id="u1", phone_number="+31600000000"))

        assert row["name"] == "Kritieke Incidenten - u1"
        assert json.loads(row["channels"]) == ["in_app", "email", "whatsapp"]
        assert json.loads(row["filters"]) == {"severity": ["critical"]}
        assert row["created_by"] == MIGRATED_BY
        assert row["organization_id"] is None

    def test_without_phone(self):
        row = legacy_rule_row(LegacyRecipient(user_id="u1"))

        assert json.loads(row["channels"]) == ["in_app", "email"]

    def test_created_by_carries_the_adding_admin(self):
        row = legacy_rule_row(LegacyRecipient(user_id="u1", added_by="admin_1"))

        assert row["created_by"] == "admin_1"

    def test_created_by_defaults_to_system(self):
        assert legacy_rule_row(LegacyRecipient(user_id="u1"))["created_by"] == "system"

    def test_row_is_a_valid_rule(self):
        rule = parse_rule_row(dict(legacy_rule_row(LegacyRecipient(user_id="u1")), id=1))

        assert rule.recipient.id == "u1"
        assert rule.filter.severity == {"critical"}


@pytest.mark.unit
class TestMigrateCriticalRecipients:
    def test_migrates_enabled_recipients(self, legacy_store):
        rule_store = InMemoryRuleStore()

        report = migrate_critical_recipients_to_rules(legacy_store, rule_store)

        assert report.total == 2
        assert report.migrated == 2
        assert sorted(row["recipient_id"] for row in rule_store.rows) == [
            "user_a",
            "user_b",
        ]

    def test_rerun_is_safe(self, legacy_store):
        rule_store = InMemoryRuleStore()

        migrate_critical_recipients_to_rules(legacy_store, rule_store)
        report = migrate_critical_recipients_to_rules(legacy_store, rule_store)

        assert report.migrated == 0
        assert report.skipped == 2
        assert len(rule_store.rows) == 2

    def test_existing_non_critical_rule_does_not_count(self, legacy_store):
        rule_store = InMemoryRuleStore(
            [
                make_rule_row(rule_id=1, recipient_id="user_a", filters={"severity": ["low"]}),
                make_rule_row(rule_id=2, recipient_id="user_b", filters="{broken"),
            ]
        )

        report = migrate_critical_recipients_to_rules(legacy_store, rule_store)

        assert report.migrated == 2
        assert report.skipped == 0

    def test_existing_critical_rule_counts_without_full_validation(self, legacy_store):
        rule_store = InMemoryRuleStore(
            [
                make_rule_row(
                    rule_id=1,
                    recipient_id="user_a",
                    channels=["in_app", "pager"],
                    filters={"severity": ["critical"]},
                ),
                make_rule_row(
                    rule_id=2,
                    recipient_type="project",
                    recipient_id="user_b",
                    filters={"severity": ["high", "critical"]},
                ),
            ]
        )

        report = migrate_critical_recipients_to_rules(legacy_store, rule_store)

        assert report.migrated == 0
        assert report.skipped == 2

    def test_failed_create_is_counted(self, legacy_store):
        rule_store = MagicMock()
        rule_store.list_rules_for_recipient.return_value = []
        rule_store.create_rule.side_effect = [
            OperationResult.transient_error("throttled", error_code="THROTTLED"),
            RuntimeError("boom"),
        ]

        report = migrate_critical_recipients_to_rules(legacy_store, rule_store)

        assert report.failed == 2
        assert report.migrated == 0
