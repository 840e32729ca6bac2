"""User identity resolution with dependency injection.

Resolves user ids to a normalized IdentityProfile through the identity
provider client. All dependencies are injected via constructor.
"""

import structlog
from typing import Any, Dict, Protocol

from infrastructure.identity.models import IdentityProfile
from infrastructure.operations import OperationResult


logger = structlog.get_logger()


class IdentityProviderClient(Protocol):
    """Provider client returning raw user payloads."""

    def get_user(self, user_id: str) -> OperationResult: ...


def profile_from_clerk(payload: Dict[str, Any]) -> IdentityProfile:
    """Normalize a Clerk user payload."""
    emails = [
        entry["email_address"]
        for entry in payload.get("email_addresses") or []
        if entry.get("email_address")
    ]
    phones = [
        entry["phone_number"]
        for entry in payload.get("phone_numbers") or []
        if entry.get("phone_number")
    ]
    return IdentityProfile(
        user_id=payload["id"],
        email_addresses=emails,
        phone_numbers=phones,
        first_name=payload.get("first_name"),
        last_name=payload.get("last_name"),
    )


class IdentityResolver:
    """Resolve user ids into identity profiles.

    Example:
        from infrastructure.identity import IdentityResolver

        resolver = IdentityResolver(client=clerk_client)
        result = resolver.resolve("user_123")
        if result.is_success:
            profile = result.data
    """

    def __init__(self, client: IdentityProviderClient):
        self._client = client
        self._logger = logger.bind(component="identity_resolver")

    def resolve(self, user_id: str) -> OperationResult:
        """Resolve a user id.

        Returns:
            OperationResult carrying an IdentityProfile, or the provider's
            error result unchanged
        """
        log = self._logger.bind(user_id=user_id)
        result = self._client.get_user(user_id)
        if not result.is_success:
            log.info(
                "identity_resolution_failed",
                status=result.status.value,
                error_code=result.error_code,
            )
            return result

        try:
            profile = profile_from_clerk(result.data or {})
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("identity_payload_invalid", error=str(exc))
            return OperationResult.permanent_error(
                f"Invalid identity payload for {user_id}",
                error_code="INVALID_PAYLOAD",
            )

        log.debug("identity_resolved")
        return OperationResult.success(data=profile, message="Identity resolved")
