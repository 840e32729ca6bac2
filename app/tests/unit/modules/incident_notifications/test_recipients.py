"""Unit tests for recipient resolution."""

from unittest.mock import MagicMock

import pytest

from modules.incident_notifications.domain.models import (
    OrganizationRecipient,
    TeamRecipient,
    UserRecipient,
)
from modules.incident_notifications.recipients import RecipientResolver


def _ids(profiles):
    return [profile.user_id for profile in profiles]


@pytest.mark.unit
class TestRecipientResolver:
    def test_user(self, identity, membership_store):
        resolver = RecipientResolver(identity, membership_store)

        assert _ids(resolver.resolve(UserRecipient(id="user_a"))) == ["user_a"]

    def test_unknown_user_resolves_to_nobody(self, identity, membership_store):
        resolver = RecipientResolver(identity, membership_store)

        assert resolver.resolve(UserRecipient(id="ghost")) == []

    def test_failing_user_lookup(self, identity_factory, profiles, membership_store):
        identity = identity_factory(profiles, failing={"user_a"})
        resolver = RecipientResolver(identity, membership_store)

        assert resolver.resolve(UserRecipient(id="user_a")) == []

    def test_team(self, identity, membership_store):
        resolver = RecipientResolver(identity, membership_store, max_workers=2)

        assert _ids(resolver.resolve(TeamRecipient(id=3))) == ["user_a", "user_b"]

    def test_organization_only_active_members(self, identity, membership_store):
        resolver = RecipientResolver(identity, membership_store)

        assert _ids(resolver.resolve(OrganizationRecipient(id=7))) == [
            "user_a",
            "user_c",
            "user_d",
        ]

    def test_unknown_team_is_empty(self, identity, membership_store):
        resolver = RecipientResolver(identity, membership_store)

        assert resolver.resolve(TeamRecipient(id=99)) == []
        identity.get_user.assert_not_called()

    def test_member_lookup_failure_skips_member(
        self, identity_factory, profiles, membership_store
    ):
        identity = identity_factory(profiles, failing={"user_a"})
        resolver = RecipientResolver(identity, membership_store)

        assert _ids(resolver.resolve(TeamRecipient(id=3))) == ["user_b"]

    def test_membership_store_failure(self, identity):
        memberships = MagicMock()
        memberships.list_active_org_members.side_effect = RuntimeError("db down")
        resolver = RecipientResolver(identity, memberships)

        assert resolver.resolve(OrganizationRecipient(id=7)) == []

    def test_duplicate_members_looked_up_once(self, identity):
        memberships = MagicMock()
        memberships.list_active_project_members.return_value = [
            "user_a",
            "user_a",
            "user_b",
        ]
        resolver = RecipientResolver(identity, memberships)

        assert _ids(resolver.resolve(TeamRecipient(id=3))) == ["user_a", "user_b"]
        assert identity.get_user.call_count == 2

    def test_unexpected_descriptor(self, identity, membership_store):
        resolver = RecipientResolver(identity, membership_store)

        assert resolver.resolve(MagicMock(type="group")) == []
