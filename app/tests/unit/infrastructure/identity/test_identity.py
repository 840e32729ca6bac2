"""Unit tests for identity resolution.

Tests cover:
- IdentityProfile derived properties
- Clerk payload normalization
- IdentityResolver error passthrough and payload validation
- IdentityService facade
"""

from unittest.mock import MagicMock

import pytest

from infrastructure.identity import (
    IdentityProfile,
    IdentityResolver,
    IdentityService,
    profile_from_clerk,
)
from infrastructure.operations import OperationResult, OperationStatus
from tests.factories import make_clerk_user


@pytest.mark.unit
class TestIdentityProfile:
    def test_primary_contacts_are_first_entries(self):
        profile = IdentityProfile(
            user_id="user_1",
            email_addresses=["first@example.com", "second@example.com"],
            phone_numbers=["+31600000001", "+31600000002"],
        )

        assert profile.primary_email == "first@example.com"
        assert profile.primary_phone == "+31600000001"

    def test_missing_contacts(self):
        profile = IdentityProfile(user_id="user_1")

        assert profile.primary_email is None
        assert profile.primary_phone is None


@pytest.mark.unit
class TestProfileFromClerk:
    def test_normalizes_payload(self):
        payload = make_clerk_user(
            user_id="user_9",
            emails=["jan@example.com"],
            phones=["+31612345678"],
        )

        profile = profile_from_clerk(payload)

        assert profile.user_id == "user_9"
        assert profile.email_addresses == ["jan@example.com"]
        assert profile.phone_numbers == ["+31612345678"]
        assert profile.first_name == "Jan"

    def test_null_lists(self):
        profile = profile_from_clerk(
            {"id": "user_1", "email_addresses": None, "phone_numbers": None}
        )

        assert profile.email_addresses == []
        assert profile.phone_numbers == []

    def test_missing_id_raises(self):
        with pytest.raises(KeyError):
            profile_from_clerk({"email_addresses": []})


@pytest.mark.unit
class TestIdentityResolver:
    def test_resolves_profile(self):
        client = MagicMock()
        client.get_user.return_value = OperationResult.success(
            data=make_clerk_user(user_id="user_1")
        )

        result = IdentityResolver(client=client).resolve("user_1")

        assert result.is_success
        assert isinstance(result.data, IdentityProfile)
        client.get_user.assert_called_once_with("user_1")

    def test_passes_through_provider_errors(self):
        client = MagicMock()
        error = OperationResult.error(OperationStatus.NOT_FOUND, "missing")
        client.get_user.return_value = error

        result = IdentityResolver(client=client).resolve("user_1")

        assert result is error

    def test_invalid_payload(self):
        client = MagicMock()
        client.get_user.return_value = OperationResult.success(data={"no": "id"})

        result = IdentityResolver(client=client).resolve("user_1")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "INVALID_PAYLOAD"


@pytest.mark.unit
class TestIdentityService:
    def test_get_profile_returns_none_on_failure(self, mock_settings):
        resolver = MagicMock()
        resolver.resolve.return_value = OperationResult.transient_error("down")

        service = IdentityService(mock_settings, resolver=resolver)

        assert service.get_profile("user_1") is None

    def test_get_user_delegates(self, mock_settings):
        resolver = MagicMock()
        profile = IdentityProfile(user_id="user_1")
        resolver.resolve.return_value = OperationResult.success(data=profile)

        service = IdentityService(mock_settings, resolver=resolver)

        assert service.get_user("user_1").data is profile
        assert service.get_profile("user_1") is profile
        assert service.resolver is resolver

    def test_default_resolver_uses_clerk(self, mock_settings):
        service = IdentityService(mock_settings)

        assert service.resolver is not None
