"""Incident notification feature settings."""

from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class NotificationFeatureSettings(FeatureSettings):
    """Incident notification engine configuration.

    Environment Variables:
        APP_URL: Public base URL of the web application
        VERCEL_URL: Deployment host name, used when APP_URL is unset
        INCIDENT_PATH_TEMPLATE: Path of the incident detail view
        DISPATCH_MODE: "sync" or "background"
        MAX_RECIPIENT_WORKERS: Concurrent recipients per dispatch
        DEDUPLICATE_DISPATCH: Skip incidents already dispatched
        IDEMPOTENCY_TTL_SECONDS: Lifetime of dispatch dedupe entries
        IDEMPOTENCY_TABLE: DynamoDB table holding dispatch dedupe entries
        NOTIFICATION_RULES_TABLE: DynamoDB table holding notification rules
        PROJECT_MEMBERS_TABLE: DynamoDB table holding project memberships
        ORGANIZATION_MEMBERS_TABLE: DynamoDB table holding organization memberships
        CRITICAL_RECIPIENTS_TABLE: DynamoDB table holding phone overrides
        NOTIFICATIONS_TABLE: DynamoDB table receiving in-app notifications

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        base_url = settings.notifications.base_url
        ```
    """

    APP_URL: str | None = Field(default=None, alias="APP_URL")
    VERCEL_URL: str | None = Field(default=None, alias="VERCEL_URL")
    INCIDENT_PATH_TEMPLATE: str = Field(
        default="/dashboard/ai-safety/{incident_id}", alias="INCIDENT_PATH_TEMPLATE"
    )
    DISPATCH_MODE: Literal["sync", "background"] = Field(
        default="sync", alias="DISPATCH_MODE"
    )
    MAX_RECIPIENT_WORKERS: int = Field(
        default=8, alias="MAX_RECIPIENT_WORKERS"
    )
    DEDUPLICATE_DISPATCH: bool = Field(
        default=False, alias="DEDUPLICATE_DISPATCH"
    )
    IDEMPOTENCY_TTL_SECONDS: int = Field(default=3600, alias="IDEMPOTENCY_TTL_SECONDS")
    IDEMPOTENCY_TABLE: str = Field(
        default="incident_notification_idempotency", alias="IDEMPOTENCY_TABLE"
    )

    RULES_TABLE: str = Field(
        default="notification_rules", alias="NOTIFICATION_RULES_TABLE"
    )
    PROJECT_MEMBERS_TABLE: str = Field(
        default="project_members", alias="PROJECT_MEMBERS_TABLE"
    )
    ORGANIZATION_MEMBERS_TABLE: str = Field(
        default="organization_members", alias="ORGANIZATION_MEMBERS_TABLE"
    )
    CRITICAL_RECIPIENTS_TABLE: str = Field(
        default="critical_incident_recipients", alias="CRITICAL_RECIPIENTS_TABLE"
    )
    NOTIFICATIONS_TABLE: str = Field(
        default="notifications", alias="NOTIFICATIONS_TABLE"
    )

    @property
    def base_url(self) -> str:
        """Base URL used for deep links into the application."""
        if self.APP_URL:
            return self.APP_URL.rstrip("/")
        if self.VERCEL_URL:
            return f"https://{self.VERCEL_URL}"
        return "http://localhost:3000"
