"""Clerk Backend API client for infrastructure layer.

Note: Application code should obtain the client from infrastructure.services.

    from infrastructure.services import get_clerk_client

    result = get_clerk_client().get_user("user_123")
    if result.is_success:
        payload = result.data
"""

from infrastructure.clients.clerk.client import ClerkClient

__all__ = ["ClerkClient"]
