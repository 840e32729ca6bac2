"""Identity service for dependency injection.

Provides a class-based interface to identity resolution for easier DI and
testing.
"""

from typing import Optional, TYPE_CHECKING

from infrastructure.identity.models import IdentityProfile
from infrastructure.operations import OperationResult

if TYPE_CHECKING:
    from infrastructure.identity.resolver import IdentityResolver
    from infrastructure.configuration import Settings


class IdentityService:
    """Class-based identity service.

    A thin facade: all work is delegated to the underlying IdentityResolver.

    Usage:
        from infrastructure.services import get_identity_service

        identity = get_identity_service()
        result = identity.get_user("user_123")
        if result.is_success:
            email = result.data.primary_email
    """

    def __init__(
        self,
        settings: "Settings",
        resolver: Optional["IdentityResolver"] = None,
    ):
        """Initialize identity service.

        Args:
            settings: Settings instance (passed from provider).
            resolver: Optional pre-configured IdentityResolver instance.
                If not provided, creates one backed by the Clerk client.
        """
        if resolver is None:
            # Import here to avoid circular dependency
            from infrastructure.identity.resolver import IdentityResolver
            from infrastructure.clients.clerk import ClerkClient

            resolver = IdentityResolver(client=ClerkClient(settings))

        self._resolver = resolver

    def get_user(self, user_id: str) -> OperationResult:
        """Look up a user; data is an IdentityProfile on success."""
        return self._resolver.resolve(user_id)

    def get_profile(self, user_id: str) -> Optional[IdentityProfile]:
        """Look up a user, returning None on any failure."""
        result = self._resolver.resolve(user_id)
        return result.data if result.is_success else None

    @property
    def resolver(self) -> "IdentityResolver":
        return self._resolver
