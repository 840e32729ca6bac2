"""Unit tests for the DynamoDB-backed stores."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from infrastructure.clients.aws import DynamoDBClient, serialize_item
from infrastructure.notifications.channels import NotificationRecord
from infrastructure.operations import OperationResult, OperationStatus
from modules.incident_notifications.infrastructure import (
    DynamoDBMembershipStore,
    DynamoDBNotificationRecordStore,
    DynamoDBPhoneOverrideStore,
    DynamoDBRuleStore,
)
from tests.factories import make_rule_row


def _items(*rows):
    return OperationResult.success(data=[serialize_item(row) for row in rows])


@pytest.fixture
def client():
    return MagicMock(spec=DynamoDBClient)


@pytest.mark.unit
class TestDynamoDBRuleStore:
    def test_list_enabled_rules(self, client):
        client.scan.return_value = _items(make_rule_row(rule_id=1))
        store = DynamoDBRuleStore(client, "notification_rules")

        rows = store.list_enabled_rules()

        assert rows[0]["id"] == 1
        assert rows[0]["recipient_id"] == "user_1"
        kwargs = client.scan.call_args.kwargs
        assert kwargs["ExpressionAttributeValues"] == {":enabled": {"BOOL": True}}

    def test_scan_failure_returns_no_rules(self, client):
        client.scan.return_value = OperationResult.transient_error("throttled")

        assert DynamoDBRuleStore(client, "notification_rules").list_enabled_rules() == []

    def test_list_rules_for_recipient(self, client):
        client.scan.return_value = _items(make_rule_row(recipient_id="u1"))

        rows = DynamoDBRuleStore(client, "rules").list_rules_for_recipient("u1")

        assert len(rows) == 1
        assert client.scan.call_args.kwargs["ExpressionAttributeValues"] == {
            ":recipient_id": {"S": "u1"}
        }

    def test_create_rule_allocates_next_id(self, client):
        client.scan.return_value = _items({"id": 3}, {"id": 8})
        client.put_item.return_value = OperationResult.success()
        store = DynamoDBRuleStore(client, "rules")

        result = store.create_rule({"name": "r", "organization_id": None})

        assert result.data == {"id": 9}
        kwargs = client.put_item.call_args.kwargs
        assert kwargs["Item"] == {"name": {"S": "r"}, "id": {"N": "9"}}
        assert kwargs["ConditionExpression"] == "attribute_not_exists(id)"

    def test_create_rule_conflict(self, client):
        client.scan.return_value = _items()
        client.put_item.return_value = OperationResult.permanent_error(
            "exists", error_code="CONDITION_FAILED"
        )

        result = DynamoDBRuleStore(client, "rules").create_rule({"name": "r"})

        assert result.error_code == "CONDITION_FAILED"

    def test_create_rule_without_id(self, client):
        client.scan.return_value = OperationResult.transient_error("down")

        result = DynamoDBRuleStore(client, "rules").create_rule({"name": "r"})

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "ID_ALLOCATION_FAILED"
        client.put_item.assert_not_called()


@pytest.mark.unit
class TestDynamoDBMembershipStore:
    def test_project_members(self, client):
        client.query.return_value = _items(
            {"project_id": 3, "user_id": "a"}, {"project_id": 3, "user_id": "b"}
        )
        store = DynamoDBMembershipStore(client, "project_members", "org_members")

        assert store.list_active_project_members(3) == ["a", "b"]
        assert client.query.call_args.args == ("project_members",)

    def test_org_members_filtered_on_status(self, client):
        client.query.return_value = _items(
            {"organization_id": 7, "user_id": "a", "status": "active"},
            {"organization_id": 7, "user_id": "b", "status": "invited"},
            {"organization_id": 7, "user_id": "c"},
        )
        store = DynamoDBMembershipStore(client, "project_members", "org_members")

        assert store.list_active_org_members(7) == ["a", "c"]

    def test_query_failure(self, client):
        client.query.return_value = OperationResult.transient_error("down")
        store = DynamoDBMembershipStore(client, "project_members", "org_members")

        assert store.list_active_project_members(3) == []
        assert store.list_active_org_members(7) == []


@pytest.mark.unit
class TestDynamoDBPhoneOverrideStore:
    def test_override_phone(self, client):
        client.get_item.return_value = OperationResult.success(
            data={"Item": serialize_item({"user_id": "a", "phone_number": "+31611111111"})}
        )

        store = DynamoDBPhoneOverrideStore(client, "critical_incident_recipients")

        assert store.get_override_phone("a") == "+31611111111"
        assert client.get_item.call_args.kwargs["Key"] == {"user_id": {"S": "a"}}

    @pytest.mark.parametrize(
        "result",
        [
            OperationResult.success(data={}),
            OperationResult.success(data={"Item": serialize_item({"user_id": "a"})}),
            OperationResult.transient_error("down"),
        ],
    )
    def test_no_override(self, client, result):
        client.get_item.return_value = result

        assert DynamoDBPhoneOverrideStore(client, "t").get_override_phone("a") is None

    def test_list_legacy_recipients(self, client):
        client.scan.return_value = _items(
            {
                "user_id": "a",
                "phone_number": "+31611111111",
                "enabled": True,
                "added_by": "admin_1",
            },
            {"user_id": "b", "enabled": False},
        )

        recipients = DynamoDBPhoneOverrideStore(client, "t").list_legacy_recipients()

        assert [
            (r.user_id, r.phone_number, r.enabled, r.added_by) for r in recipients
        ] == [
            ("a", "+31611111111", True, "admin_1"),
            ("b", None, False, None),
        ]


@pytest.mark.unit
class TestDynamoDBNotificationRecordStore:
    def test_insert(self, client):
        client.put_item.return_value = OperationResult.success()
        record = NotificationRecord(
            user_id="a",
            type="incident",
            title="Nieuw incident gemeld",
            message="Er is een incident gemeld",
            incident_id=42,
            created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )

        result = DynamoDBNotificationRecordStore(client, "notifications").insert(record)

        assert result.is_success
        item = client.put_item.call_args.kwargs["Item"]
        assert item["user_id"] == {"S": "a"}
        assert item["incident_id"] == {"N": "42"}
        assert item["read"] == {"BOOL": False}
        assert item["notification_id"]["S"].startswith("2024-05-01T12:00:00+00:00#")
        assert result.data["notification_id"] == item["notification_id"]["S"]

    def test_insert_failure(self, client):
        client.put_item.return_value = OperationResult.transient_error("throttled")
        record = NotificationRecord(user_id="a", type="incident", title="t", message="m")

        result = DynamoDBNotificationRecordStore(client, "notifications").insert(record)

        assert not result.is_success

    def test_healthcheck(self, client):
        client.healthcheck.return_value = OperationResult.success()

        assert DynamoDBNotificationRecordStore(client, "n").healthcheck().is_success
