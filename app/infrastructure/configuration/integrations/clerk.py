"""Clerk integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class ClerkSettings(IntegrationSettings):
    """Clerk Backend API configuration.

    Environment Variables:
        CLERK_SECRET_KEY: Backend API secret key
        CLERK_API_URL: Backend API base URL
        CLERK_TIMEOUT_SECONDS: HTTP timeout for Clerk API calls
    """

    CLERK_SECRET_KEY: str | None = Field(default=None, alias="CLERK_SECRET_KEY")
    CLERK_API_URL: str = Field(default="https://api.clerk.com/v1", alias="CLERK_API_URL")
    CLERK_TIMEOUT_SECONDS: int = Field(default=10, alias="CLERK_TIMEOUT_SECONDS")
