"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from infrastructure.clients.aws import DynamoDBClient, SessionProvider
from infrastructure.configuration import Settings, get_settings
from infrastructure.identity import IdentityService
from infrastructure.idempotency import IdempotencyCache, get_cache
from infrastructure.notifications import NotificationService

if TYPE_CHECKING:
    from modules.incident_notifications.infrastructure import (
        DynamoDBMembershipStore,
        DynamoDBNotificationRecordStore,
        DynamoDBPhoneOverrideStore,
        DynamoDBRuleStore,
    )
    from modules.incident_notifications.service import IncidentNotifier


@lru_cache
def get_dynamodb_client() -> DynamoDBClient:
    """Provider for the DynamoDB client.

    Region and endpoint come from ``settings.aws``; credentials are resolved
    by boto3 per call, so caching the client is safe.
    """
    settings = get_settings()
    session = SessionProvider(
        region=settings.aws.AWS_REGION,
        endpoint_url=settings.aws.DYNAMODB_ENDPOINT_URL,
    )
    return DynamoDBClient(session_provider=session)


@lru_cache
def get_identity_service() -> IdentityService:
    """
    Get application-scoped identity service singleton.

    Returns:
        IdentityService: Identity service backed by the Clerk client.

    Usage:
        identity = get_identity_service()
        result = identity.get_user("user_123")
    """
    return IdentityService(settings=get_settings())


@lru_cache
def get_rule_store() -> "DynamoDBRuleStore":
    from modules.incident_notifications.infrastructure import DynamoDBRuleStore

    return DynamoDBRuleStore(
        get_dynamodb_client(), get_settings().notifications.RULES_TABLE
    )


@lru_cache
def get_membership_store() -> "DynamoDBMembershipStore":
    from modules.incident_notifications.infrastructure import DynamoDBMembershipStore

    feature = get_settings().notifications
    return DynamoDBMembershipStore(
        get_dynamodb_client(),
        project_members_table=feature.PROJECT_MEMBERS_TABLE,
        organization_members_table=feature.ORGANIZATION_MEMBERS_TABLE,
    )


@lru_cache
def get_phone_override_store() -> "DynamoDBPhoneOverrideStore":
    from modules.incident_notifications.infrastructure import (
        DynamoDBPhoneOverrideStore,
    )

    return DynamoDBPhoneOverrideStore(
        get_dynamodb_client(), get_settings().notifications.CRITICAL_RECIPIENTS_TABLE
    )


@lru_cache
def get_notification_record_store() -> "DynamoDBNotificationRecordStore":
    from modules.incident_notifications.infrastructure import (
        DynamoDBNotificationRecordStore,
    )

    return DynamoDBNotificationRecordStore(
        get_dynamodb_client(), get_settings().notifications.NOTIFICATIONS_TABLE
    )


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Wires the email, WhatsApp and in-app channels; the in-app channel writes
    to the notifications table.
    """
    return NotificationService(
        settings=get_settings(),
        record_store=get_notification_record_store(),
    )


def get_idempotency_cache() -> IdempotencyCache:
    return get_cache()


@lru_cache
def get_incident_notifier() -> "IncidentNotifier":
    """
    Get application-scoped incident notifier singleton.

    Returns:
        IncidentNotifier: Notifier wired with the DynamoDB stores, the
        identity service and the notification service.

    Usage:
        notifier = get_incident_notifier()
        notifier.notify_incident(incident)
    """
    # Import here to avoid circular dependency with the feature module
    from modules.incident_notifications.service import build_incident_notifier

    return build_incident_notifier(
        get_settings(),
        rule_store=get_rule_store(),
        membership_store=get_membership_store(),
        phone_override_store=get_phone_override_store(),
        identity=get_identity_service(),
        notifications=get_notification_service(),
        cache=get_idempotency_cache(),
    )


def reset_providers() -> None:
    """Clear every cached provider (for testing only)."""
    for provider in (
        get_settings,
        get_dynamodb_client,
        get_identity_service,
        get_rule_store,
        get_membership_store,
        get_phone_override_store,
        get_notification_record_store,
        get_notification_service,
        get_incident_notifier,
    ):
        provider.cache_clear()


__all__ = [
    "Settings",
    "get_settings",
    "get_dynamodb_client",
    "get_identity_service",
    "get_idempotency_cache",
    "get_incident_notifier",
    "get_membership_store",
    "get_notification_record_store",
    "get_notification_service",
    "get_phone_override_store",
    "get_rule_store",
    "reset_providers",
]
