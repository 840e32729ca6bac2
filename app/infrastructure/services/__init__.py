"""
Dependency injection services.

Provides application-scoped provider functions for infrastructure services
and the incident notifier.
"""

from infrastructure.services.providers import (
    get_dynamodb_client,
    get_idempotency_cache,
    get_identity_service,
    get_incident_notifier,
    get_membership_store,
    get_notification_record_store,
    get_notification_service,
    get_phone_override_store,
    get_rule_store,
    get_settings,
    reset_providers,
)

__all__ = [
    "get_dynamodb_client",
    "get_idempotency_cache",
    "get_identity_service",
    "get_incident_notifier",
    "get_membership_store",
    "get_notification_record_store",
    "get_notification_service",
    "get_phone_override_store",
    "get_rule_store",
    "get_settings",
    "reset_providers",
]
