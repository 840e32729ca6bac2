"""Loading and validation of persisted notification rules.

Rule rows store their channels and filters as JSON text. Rows are validated
when loaded; an invalid row is logged and skipped, never fatal.
"""

import json
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from modules.incident_notifications.domain.errors import RuleLoadError
from modules.incident_notifications.domain.models import NotificationRule
from modules.incident_notifications.infrastructure.stores import RuleStore

logger = get_module_logger()


def _decode_json_field(row: Mapping[str, Any], field: str, default: Any) -> Any:
    value = row.get(field)
    if value is None or value == "":
        return default
    if isinstance(value, (bytes, str)):
        try:
            return json.loads(value)
        except json.JSONDecodeError as exc:
            raise RuleLoadError(
                f"Field '{field}' is not valid JSON: {exc}",
                rule_id=row.get("id"),
                row=row,
            ) from exc
    return value


def parse_rule_row(row: Mapping[str, Any]) -> NotificationRule:
    """Build a NotificationRule from a persisted row.

    Args:
        row: Mapping with id, name, description, recipient_type, recipient_id,
            channels (JSON list), filters (JSON object), organization_id, enabled

    Raises:
        RuleLoadError: if the row is malformed
    """
    channels = _decode_json_field(row, "channels", [])
    filters = _decode_json_field(row, "filters", {})

    data: Dict[str, Any] = {
        "id": row.get("id"),
        "name": row.get("name") or f"rule-{row.get('id')}",
        "description": row.get("description"),
        "recipient": {
            "type": row.get("recipient_type"),
            "id": row.get("recipient_id"),
        },
        "channels": channels,
        "filter": filters,
        "organization_id": row.get("organization_id"),
        "enabled": row.get("enabled", True),
    }

    try:
        return NotificationRule.model_validate(data)
    except ValidationError as exc:
        raise RuleLoadError(
            f"Invalid notification rule: {exc.error_count()} validation error(s)",
            rule_id=row.get("id"),
            row=row,
        ) from exc


def load_enabled_rules(store: RuleStore) -> List[NotificationRule]:
    """Load and validate every enabled rule, skipping invalid ones."""
    rules = []
    for row in store.list_enabled_rules():
        try:
            rule = parse_rule_row(row)
        except RuleLoadError as exc:
            logger.warning(
                "notification_rule_invalid",
                rule_id=exc.rule_id,
                error=str(exc),
                cause=str(exc.__cause__) if exc.__cause__ else None,
            )
            continue
        if rule.enabled:
            rules.append(rule)

    logger.debug("notification_rules_loaded", rule_count=len(rules))
    return rules
