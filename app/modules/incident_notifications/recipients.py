"""Recipient resolution.

Expands a rule's recipient descriptor into the identity profiles of the
people it targets. Resolution never raises: lookups that fail are logged and
the affected user is left out.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from infrastructure.identity import IdentityProfile, IdentityService
from infrastructure.logging import get_module_logger
from infrastructure.notifications.dispatcher import submit_in_context
from modules.incident_notifications.domain.models import (
    OrganizationRecipient,
    RecipientDescriptor,
    TeamRecipient,
    UserRecipient,
)
from modules.incident_notifications.infrastructure.stores import MembershipStore

logger = get_module_logger()


class RecipientResolver:
    """Resolves recipient descriptors into identity profiles.

    Attributes:
        identity: Identity service used to look up every user
        memberships: Project and organization membership store
        max_workers: Upper bound on concurrent member lookups
    """

    def __init__(
        self,
        identity: IdentityService,
        memberships: MembershipStore,
        max_workers: int = 8,
    ):
        self.identity = identity
        self.memberships = memberships
        self.max_workers = max(1, max_workers)

    def resolve(self, descriptor: RecipientDescriptor) -> List[IdentityProfile]:
        """Return the identities targeted by a descriptor, possibly empty."""
        if isinstance(descriptor, UserRecipient):
            profile = self._lookup(descriptor.id)
            return [profile] if profile else []

        if isinstance(descriptor, TeamRecipient):
            member_ids = self._list_members(
                self.memberships.list_active_project_members, descriptor
            )
            return self._lookup_many(member_ids)

        if isinstance(descriptor, OrganizationRecipient):
            member_ids = self._list_members(
                self.memberships.list_active_org_members, descriptor
            )
            return self._lookup_many(member_ids)

        logger.warning(
            "recipient_type_unexpected",
            recipient_type=getattr(descriptor, "type", type(descriptor).__name__),
        )
        return []

    def _list_members(self, lookup, descriptor) -> List[str]:
        try:
            member_ids = lookup(descriptor.id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "recipient_membership_lookup_failed",
                recipient_type=descriptor.type,
                recipient_id=descriptor.id,
                error=str(e),
            )
            return []

        logger.debug(
            "recipient_members_listed",
            recipient_type=descriptor.type,
            recipient_id=descriptor.id,
            member_count=len(member_ids),
        )
        return list(dict.fromkeys(member_ids))

    def _lookup(self, user_id: str):
        try:
            result = self.identity.get_user(user_id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("recipient_lookup_failed", user_id=user_id, error=str(e))
            return None

        if not result.is_success:
            logger.warning(
                "recipient_lookup_failed",
                user_id=user_id,
                status=result.status.value,
                error=result.message,
                error_code=result.error_code,
            )
            return None
        return result.data

    def _lookup_many(self, user_ids: Sequence[str]) -> List[IdentityProfile]:
        if not user_ids:
            return []

        workers = min(self.max_workers, len(user_ids))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                submit_in_context(executor, self._lookup, user_id)
                for user_id in user_ids
            ]
            profiles = [future.result() for future in futures]

        return [profile for profile in profiles if profile is not None]
