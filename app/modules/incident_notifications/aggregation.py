"""Recipient aggregation across matching rules.

Resolves the recipients of every matching rule, unions the requested
channels per user and enriches each unique user once. The resulting map is
complete before any delivery starts.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence, Set

from infrastructure.identity import IdentityProfile
from infrastructure.logging import get_module_logger
from infrastructure.notifications import Channel, ResolvedRecipient
from infrastructure.notifications.dispatcher import submit_in_context
from modules.incident_notifications.contacts import ContactEnricher
from modules.incident_notifications.domain.models import NotificationRule
from modules.incident_notifications.recipients import RecipientResolver

logger = get_module_logger()


class RecipientAggregator:
    """Builds the per-user recipient map for one incident."""

    def __init__(
        self,
        resolver: RecipientResolver,
        enricher: ContactEnricher,
        max_workers: int = 8,
    ):
        self.resolver = resolver
        self.enricher = enricher
        self.max_workers = max(1, max_workers)

    def aggregate(
        self, rules: Sequence[NotificationRule]
    ) -> Dict[str, ResolvedRecipient]:
        """Return one ResolvedRecipient per user reached by any rule.

        A user's channel set is the union of the channels of every rule that
        reached them. Aggregating the same rules twice yields an equal map.
        """
        if not rules:
            return {}

        resolved = self._resolve_all(rules)

        channels: Dict[str, Set[Channel]] = {}
        profiles: Dict[str, IdentityProfile] = {}
        for rule, rule_profiles in zip(rules, resolved):
            for profile in rule_profiles:
                channels.setdefault(profile.user_id, set()).update(rule.channels)
                profiles.setdefault(profile.user_id, profile)

        if not channels:
            return {}

        user_ids = list(channels)
        workers = min(self.max_workers, len(user_ids))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                submit_in_context(
                    executor, self.enricher.enrich, user_id, profiles.get(user_id)
                )
                for user_id in user_ids
            ]
            contacts = [future.result() for future in futures]

        recipients = {
            user_id: ResolvedRecipient(
                user_id=user_id,
                email=contact.email,
                phone_number=contact.phone,
                channels=frozenset(channels[user_id]),
            )
            for user_id, contact in zip(user_ids, contacts)
        }

        logger.info(
            "notification_recipients_aggregated",
            rule_count=len(rules),
            recipient_count=len(recipients),
        )
        return recipients

    def _resolve_all(
        self, rules: Sequence[NotificationRule]
    ) -> List[List[IdentityProfile]]:
        workers = min(self.max_workers, len(rules))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                submit_in_context(executor, self._resolve_rule, rule) for rule in rules
            ]
            return [future.result() for future in futures]

    def _resolve_rule(self, rule: NotificationRule) -> List[IdentityProfile]:
        try:
            profiles = self.resolver.resolve(rule.recipient)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "notification_rule_resolution_failed",
                rule_id=rule.id,
                recipient_type=rule.recipient.type,
                error=str(e),
            )
            return []

        logger.debug(
            "notification_rule_resolved",
            rule_id=rule.id,
            recipient_type=rule.recipient.type,
            recipient_count=len(profiles),
        )
        return profiles

