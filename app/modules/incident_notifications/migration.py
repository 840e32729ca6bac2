"""Migration of legacy critical-incident recipients to notification rules.

Each enabled row of the critical-incident recipients table becomes a user
rule for critical incidents. Users that already have a rule covering
critical incidents are left alone, so the migration can be rerun safely.
"""

import json
from typing import Any, Dict

from pydantic import BaseModel

from infrastructure.logging import get_module_logger
from infrastructure.notifications import Channel
from modules.incident_notifications.domain.models import LegacyRecipient, Severity
from modules.incident_notifications.infrastructure.stores import (
    PhoneOverrideStore,
    RuleStore,
)

logger = get_module_logger()

MIGRATED_RULE_DESCRIPTION = (
    "Geautomatiseerd gemigreerd van critical incident recipients"
)
MIGRATED_BY = "system"


class MigrationReport(BaseModel):
    """Outcome counts of one migration run."""

    total: int = 0
    migrated: int = 0
    skipped: int = 0
    failed: int = 0


def _covers_critical(row: Dict[str, Any]) -> bool:
    """True when the stored filters name critical severity.

    Only the filters column is read, so a rule that fails full validation
    for an unrelated reason (an unknown channel) still counts.
    """
    filters = row.get("filters")
    if isinstance(filters, str):
        try:
            filters = json.loads(filters)
        except ValueError:
            logger.warning("migration_existing_rule_invalid", rule_id=row.get("id"))
            return False
    if not isinstance(filters, dict):
        return False
    return Severity.CRITICAL.value in (filters.get("severity") or [])


def legacy_rule_row(recipient: LegacyRecipient) -> Dict[str, Any]:
    """Rule row replacing one legacy recipient."""
    channels = [Channel.IN_APP.value, Channel.EMAIL.value]
    if recipient.phone_number:
        channels.append(Channel.WHATSAPP.value)

    return {
        "name": f"Kritieke Incidenten - {recipient.user_id}",
        "description": MIGRATED_RULE_DESCRIPTION,
        "recipient_type": "user",
        "recipient_id": recipient.user_id,
        "channels": json.dumps(channels),
        "filters": json.dumps({"severity": [Severity.CRITICAL.value]}),
        "organization_id": None,
        "enabled": recipient.enabled,
        "created_by": recipient.added_by or MIGRATED_BY,
    }


def migrate_critical_recipients_to_rules(
    override_store: PhoneOverrideStore, rule_store: RuleStore
) -> MigrationReport:
    """Create a critical-incident rule for every enabled legacy recipient.

    Args:
        override_store: Store holding the legacy recipient rows
        rule_store: Store receiving the new rules

    Returns:
        MigrationReport with migrated, skipped and failed counts
    """
    report = MigrationReport()
    recipients = [r for r in override_store.list_legacy_recipients() if r.enabled]
    report.total = len(recipients)

    logger.info("critical_recipient_migration_started", total=report.total)

    for recipient in recipients:
        try:
            existing = rule_store.list_rules_for_recipient(recipient.user_id)
            if any(_covers_critical(row) for row in existing):
                report.skipped += 1
                logger.info("critical_recipient_already_migrated", user_id=recipient.user_id)
                continue

            result = rule_store.create_rule(legacy_rule_row(recipient))
        except Exception as e:  # pylint: disable=broad-except
            report.failed += 1
            logger.error(
                "critical_recipient_migration_failed",
                user_id=recipient.user_id,
                error=str(e),
            )
            continue

        if not result.is_success:
            report.failed += 1
            logger.error(
                "critical_recipient_migration_failed",
                user_id=recipient.user_id,
                error=result.message,
                error_code=result.error_code,
            )
            continue

        report.migrated += 1
        logger.info(
            "critical_recipient_migrated",
            user_id=recipient.user_id,
            rule_id=(result.data or {}).get("id"),
        )

    logger.info("critical_recipient_migration_completed", **report.model_dump())
    return report
