"""Domain layer - data models and errors."""

from modules.incident_notifications.domain.errors import RuleLoadError
from modules.incident_notifications.domain.models import (
    Incident,
    LegacyRecipient,
    NotificationRule,
    OrganizationRecipient,
    RecipientDescriptor,
    RuleFilter,
    Severity,
    TeamRecipient,
    UserRecipient,
)

__all__ = [
    "Incident",
    "LegacyRecipient",
    "NotificationRule",
    "OrganizationRecipient",
    "RecipientDescriptor",
    "RuleFilter",
    "RuleLoadError",
    "Severity",
    "TeamRecipient",
    "UserRecipient",
]
