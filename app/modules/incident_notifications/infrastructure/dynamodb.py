"""DynamoDB-backed stores for incident notifications.

Table layouts:
  - rules: partition key ``id`` (N); channels/filters stored as JSON text
  - project members: partition key ``project_id`` (N), sort key ``user_id`` (S)
  - organization members: partition key ``organization_id`` (N), sort key
    ``user_id`` (S), optional ``status``
  - critical recipients: partition key ``user_id`` (S)
  - notifications: partition key ``user_id`` (S), sort key ``notification_id`` (S)

Failed reads are logged and treated as "no data"; writes return the
OperationResult of the underlying client.
"""

import uuid
from typing import Any, Dict, List, Optional

from infrastructure.clients.aws import (
    DynamoDBClient,
    deserialize_item,
    items_from_result,
    serialize_item,
)
from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.in_app import NotificationRecord
from infrastructure.operations import OperationResult
from modules.incident_notifications.domain.models import LegacyRecipient
from modules.incident_notifications.infrastructure.stores import (
    ACTIVE_MEMBER_STATUS,
)

logger = get_module_logger()


def _log_failure(event: str, result: OperationResult, **context: Any) -> None:
    logger.error(
        event,
        status=result.status.value,
        error=result.message,
        error_code=result.error_code,
        **context,
    )


class DynamoDBRuleStore:
    """Notification rules table."""

    def __init__(self, client: DynamoDBClient, table_name: str) -> None:
        self._client = client
        self._table = table_name

    def list_enabled_rules(self) -> List[Dict[str, Any]]:
        result = self._client.scan(
            self._table,
            FilterExpression="#enabled = :enabled",
            ExpressionAttributeNames={"#enabled": "enabled"},
            ExpressionAttributeValues={":enabled": {"BOOL": True}},
        )
        if not result.is_success:
            _log_failure("notification_rules_scan_failed", result, table=self._table)
            return []
        return items_from_result(result)

    def list_rules_for_recipient(self, recipient_id: str) -> List[Dict[str, Any]]:
        result = self._client.scan(
            self._table,
            FilterExpression="recipient_id = :recipient_id",
            ExpressionAttributeValues={":recipient_id": {"S": recipient_id}},
        )
        if not result.is_success:
            _log_failure(
                "notification_rules_scan_failed",
                result,
                table=self._table,
                recipient_id=recipient_id,
            )
            return []
        return items_from_result(result)

    def _next_id(self) -> Optional[int]:
        result = self._client.scan(self._table, ProjectionExpression="id")
        if not result.is_success:
            _log_failure("notification_rules_scan_failed", result, table=self._table)
            return None
        ids = [int(item["id"]) for item in items_from_result(result) if "id" in item]
        return max(ids, default=0) + 1

    def create_rule(self, row: Dict[str, Any]) -> OperationResult:
        rule_id = self._next_id()
        if rule_id is None:
            return OperationResult.transient_error(
                "Could not allocate a rule id", error_code="ID_ALLOCATION_FAILED"
            )

        item = dict(row, id=rule_id)
        result = self._client.put_item(
            self._table,
            Item=serialize_item(item),
            ConditionExpression="attribute_not_exists(id)",
        )
        if not result.is_success:
            _log_failure("notification_rule_create_failed", result, rule_id=rule_id)
            return result
        return OperationResult.success(data={"id": rule_id}, message="Rule created")


class DynamoDBMembershipStore:
    """Project and organization membership tables."""

    def __init__(
        self,
        client: DynamoDBClient,
        project_members_table: str,
        organization_members_table: str,
    ) -> None:
        self._client = client
        self._projects_table = project_members_table
        self._organizations_table = organization_members_table

    def list_active_project_members(self, project_id: int) -> List[str]:
        result = self._client.query(
            self._projects_table,
            KeyConditionExpression="project_id = :project_id",
            ExpressionAttributeValues={":project_id": {"N": str(project_id)}},
        )
        if not result.is_success:
            _log_failure("project_members_query_failed", result, project_id=project_id)
            return []
        return [item["user_id"] for item in items_from_result(result)]

    def list_active_org_members(self, organization_id: int) -> List[str]:
        result = self._client.query(
            self._organizations_table,
            KeyConditionExpression="organization_id = :organization_id",
            ExpressionAttributeValues={
                ":organization_id": {"N": str(organization_id)}
            },
        )
        if not result.is_success:
            _log_failure(
                "organization_members_query_failed",
                result,
                organization_id=organization_id,
            )
            return []
        return [
            item["user_id"]
            for item in items_from_result(result)
            if (item.get("status") or ACTIVE_MEMBER_STATUS) == ACTIVE_MEMBER_STATUS
        ]


class DynamoDBPhoneOverrideStore:
    """Legacy critical-incident recipients table."""

    def __init__(self, client: DynamoDBClient, table_name: str) -> None:
        self._client = client
        self._table = table_name

    def get_override_phone(self, user_id: str) -> Optional[str]:
        result = self._client.get_item(self._table, Key={"user_id": {"S": user_id}})
        if not result.is_success:
            _log_failure("phone_override_lookup_failed", result, user_id=user_id)
            return None

        item = (result.data or {}).get("Item")
        if not item:
            return None
        return deserialize_item(item).get("phone_number") or None

    def list_legacy_recipients(self) -> List[LegacyRecipient]:
        result = self._client.scan(self._table)
        if not result.is_success:
            _log_failure("legacy_recipients_scan_failed", result, table=self._table)
            return []
        return [
            LegacyRecipient(
                user_id=item["user_id"],
                phone_number=item.get("phone_number"),
                enabled=item.get("enabled", True),
                added_by=item.get("added_by"),
            )
            for item in items_from_result(result)
        ]


class DynamoDBNotificationRecordStore:
    """Append-only notifications table."""

    def __init__(self, client: DynamoDBClient, table_name: str) -> None:
        self._client = client
        self._table = table_name

    def insert(self, record: NotificationRecord) -> OperationResult:
        notification_id = f"{record.created_at.isoformat()}#{uuid.uuid4().hex[:12]}"
        item = record.model_dump(mode="json")
        item["notification_id"] = notification_id

        result = self._client.put_item(self._table, Item=serialize_item(item))
        if not result.is_success:
            _log_failure(
                "notification_record_insert_failed", result, user_id=record.user_id
            )
            return result
        return OperationResult.success(
            data={"notification_id": notification_id},
            message="Notification record stored",
        )

    def healthcheck(self) -> OperationResult:
        return self._client.healthcheck()
