"""Storage layer for incident notifications."""

from modules.incident_notifications.infrastructure.dynamodb import (
    DynamoDBMembershipStore,
    DynamoDBNotificationRecordStore,
    DynamoDBPhoneOverrideStore,
    DynamoDBRuleStore,
)
from modules.incident_notifications.infrastructure.stores import (
    InMemoryMembershipStore,
    InMemoryNotificationRecordStore,
    InMemoryPhoneOverrideStore,
    InMemoryRuleStore,
    MembershipStore,
    PhoneOverrideStore,
    RuleStore,
)

__all__ = [
    "DynamoDBMembershipStore",
    "DynamoDBNotificationRecordStore",
    "DynamoDBPhoneOverrideStore",
    "DynamoDBRuleStore",
    "InMemoryMembershipStore",
    "InMemoryNotificationRecordStore",
    "InMemoryPhoneOverrideStore",
    "InMemoryRuleStore",
    "MembershipStore",
    "PhoneOverrideStore",
    "RuleStore",
]
