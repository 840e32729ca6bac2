"""Rule matching for incident notifications.

Pure predicates deciding which notification rules apply to an incident.
"""

from typing import Iterable, List

from infrastructure.logging import get_module_logger
from modules.incident_notifications.domain.models import (
    Incident,
    NotificationRule,
    RuleFilter,
)

logger = get_module_logger()


def matches_filter(incident: Incident, rule_filter: RuleFilter) -> bool:
    """Check an incident against a rule filter.

    Every non-empty dimension must hold (logical AND). An incident without a
    discipline fails a non-empty discipline dimension. An empty filter
    matches every incident.
    """
    if rule_filter.severity and incident.severity.value not in rule_filter.severity:
        return False

    if rule_filter.category and incident.category not in rule_filter.category:
        return False

    if rule_filter.discipline and (
        not incident.discipline or incident.discipline not in rule_filter.discipline
    ):
        return False

    if (
        rule_filter.organization_id is not None
        and incident.organization_id != rule_filter.organization_id
    ):
        return False

    if (
        rule_filter.project_id is not None
        and incident.project_id != rule_filter.project_id
    ):
        return False

    return True


def rule_matches(incident: Incident, rule: NotificationRule) -> bool:
    """Check whether a rule applies to an incident.

    The rule's organization scope is a hard tenant boundary evaluated before
    the filter: a scoped rule never applies to another organization's
    incident, nor to an incident without an organization.
    """
    if not rule.enabled:
        return False

    if rule.organization_id is not None and (
        incident.organization_id != rule.organization_id
    ):
        return False

    return matches_filter(incident, rule.filter)


def select_matching_rules(
    incident: Incident, rules: Iterable[NotificationRule]
) -> List[NotificationRule]:
    """Return the rules applying to an incident, in their original order."""
    matching = []
    for rule in rules:
        if rule_matches(incident, rule):
            logger.debug("notification_rule_matched", rule_id=rule.id, rule_name=rule.name)
            matching.append(rule)
    return matching
