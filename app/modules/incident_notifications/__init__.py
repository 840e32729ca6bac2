# modules/incident_notifications/__init__.py
"""Incident notification module.

Matches a newly created incident against the persisted notification rules,
resolves the users each matching rule targets, and delivers one
notification per user over the union of the channels requested for them.

Features:
- Rule filters on severity, category, discipline, organization and project
- User, team (project) and organization recipients
- In-app, email and WhatsApp delivery with per-channel failure isolation
- Synchronous or background dispatch, with optional deduplication
- Migration of the legacy critical-incident recipients
"""

from modules.incident_notifications.domain import (
    Incident,
    NotificationRule,
    RuleFilter,
    RuleLoadError,
    Severity,
)
from modules.incident_notifications.matching import matches_filter, rule_matches
from modules.incident_notifications.migration import (
    MigrationReport,
    migrate_critical_recipients_to_rules,
)
from modules.incident_notifications.service import (
    IncidentNotifier,
    build_incident_notifier,
    dispatch_incident_notifications,
    notify_critical_incident,
    notify_incident,
    notify_incident_background,
    shutdown_notification_executor,
)

__all__ = [
    "Incident",
    "IncidentNotifier",
    "MigrationReport",
    "NotificationRule",
    "RuleFilter",
    "RuleLoadError",
    "Severity",
    "build_incident_notifier",
    "dispatch_incident_notifications",
    "matches_filter",
    "migrate_critical_recipients_to_rules",
    "notify_critical_incident",
    "notify_incident",
    "notify_incident_background",
    "rule_matches",
    "shutdown_notification_executor",
]
