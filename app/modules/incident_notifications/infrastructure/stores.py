"""Storage interfaces for incident notifications.

Protocol-based collaborators read by the notification pipeline, with
thread-safe in-memory implementations for tests and local development.
DynamoDB-backed implementations live in ``dynamodb.py``.
"""

import itertools
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from infrastructure.notifications.channels.in_app import NotificationRecord
from infrastructure.operations import OperationResult
from modules.incident_notifications.domain.models import LegacyRecipient

ACTIVE_MEMBER_STATUS = "active"


class RuleStore(Protocol):
    """Persisted notification rules, as raw rows."""

    def list_enabled_rules(self) -> List[Dict[str, Any]]:
        """Return every rule row with ``enabled`` set."""
        ...

    def list_rules_for_recipient(self, recipient_id: str) -> List[Dict[str, Any]]:
        """Return every rule row targeting ``recipient_id``, enabled or not."""
        ...

    def create_rule(self, row: Dict[str, Any]) -> OperationResult:
        """Persist a new rule row; data carries the assigned ``id``."""
        ...


class MembershipStore(Protocol):
    """Project and organization memberships."""

    def list_active_project_members(self, project_id: int) -> List[str]:
        """Return the user ids of every member of a project."""
        ...

    def list_active_org_members(self, organization_id: int) -> List[str]:
        """Return the user ids of organization members with status ``active``."""
        ...


class PhoneOverrideStore(Protocol):
    """Legacy critical-incident recipients, source of phone overrides."""

    def get_override_phone(self, user_id: str) -> Optional[str]:
        """Return the override phone for a user, or None."""
        ...

    def list_legacy_recipients(self) -> List[LegacyRecipient]:
        """Return every legacy recipient row."""
        ...


class InMemoryRuleStore:
    """In-memory rule store. Ids are assigned sequentially on create."""

    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()) -> None:
        self._rows: List[Dict[str, Any]] = [dict(row) for row in rows]
        self._lock = threading.Lock()
        existing_ids = [
            int(row["id"]) for row in self._rows if isinstance(row.get("id"), int)
        ]
        self._ids = itertools.count(max(existing_ids, default=0) + 1)

    def list_enabled_rules(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(row) for row in self._rows if row.get("enabled", True)]

    def list_rules_for_recipient(self, recipient_id: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                dict(row)
                for row in self._rows
                if str(row.get("recipient_id")) == recipient_id
            ]

    def create_rule(self, row: Dict[str, Any]) -> OperationResult:
        with self._lock:
            stored = dict(row)
            stored["id"] = next(self._ids)
            self._rows.append(stored)
        return OperationResult.success(data={"id": stored["id"]}, message="Rule created")

    @property
    def rows(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(row) for row in self._rows]


class InMemoryMembershipStore:
    """In-memory memberships.

    Args:
        project_members: project id -> member user ids
        organization_members: organization id -> (user id, status) pairs
    """

    def __init__(
        self,
        project_members: Optional[Mapping[int, Iterable[str]]] = None,
        organization_members: Optional[
            Mapping[int, Iterable[Tuple[str, Optional[str]]]]
        ] = None,
    ) -> None:
        self._projects = {
            pid: list(members) for pid, members in (project_members or {}).items()
        }
        self._organizations = {
            oid: list(members)
            for oid, members in (organization_members or {}).items()
        }

    def list_active_project_members(self, project_id: int) -> List[str]:
        return list(self._projects.get(project_id, []))

    def list_active_org_members(self, organization_id: int) -> List[str]:
        # Rows without a status count as active
        return [
            user_id
            for user_id, status in self._organizations.get(organization_id, [])
            if (status or ACTIVE_MEMBER_STATUS) == ACTIVE_MEMBER_STATUS
        ]


class InMemoryPhoneOverrideStore:
    """In-memory legacy recipient table."""

    def __init__(self, recipients: Iterable[LegacyRecipient] = ()) -> None:
        self._recipients = {r.user_id: r for r in recipients}

    def get_override_phone(self, user_id: str) -> Optional[str]:
        recipient = self._recipients.get(user_id)
        if recipient is None:
            return None
        return recipient.phone_number or None

    def list_legacy_recipients(self) -> List[LegacyRecipient]:
        return list(self._recipients.values())


class InMemoryNotificationRecordStore:
    """Append-only in-memory notification record store."""

    def __init__(self) -> None:
        self._records: List[NotificationRecord] = []
        self._lock = threading.Lock()

    def insert(self, record: NotificationRecord) -> OperationResult:
        with self._lock:
            self._records.append(record)
        return OperationResult.success(message="Notification record stored")

    def healthcheck(self) -> OperationResult:
        return OperationResult.success(message="In-memory store available")

    @property
    def records(self) -> List[NotificationRecord]:
        with self._lock:
            return list(self._records)

    def records_for(self, user_id: str) -> List[NotificationRecord]:
        return [record for record in self.records if record.user_id == user_id]
