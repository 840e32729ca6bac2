"""User identity resolution services.

Resolves identity-provider user ids into normalized IdentityProfile models.

Usage:
    from infrastructure.services import get_identity_service

    identity = get_identity_service()
    profile = identity.get_profile("user_123")

    # Direct instantiation (for tests)
    resolver = IdentityResolver(client=mock_client)
    service = IdentityService(settings, resolver=resolver)
"""

from infrastructure.identity.models import IdentityProfile
from infrastructure.identity.resolver import (
    IdentityProviderClient,
    IdentityResolver,
    profile_from_clerk,
)
from infrastructure.identity.service import IdentityService

__all__ = [
    "IdentityProfile",
    "IdentityProviderClient",
    "IdentityResolver",
    "IdentityService",
    "profile_from_clerk",
]
