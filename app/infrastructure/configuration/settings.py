"""Incident notification engine configuration settings - main aggregator."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    AwsSettings,
    ClerkSettings,
    SmtpSettings,
    TwilioSettings,
)

# Feature settings
from infrastructure.configuration.features import NotificationFeatureSettings


class Settings(BaseSettings):
    """Notification engine configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: External service configurations (SMTP, Twilio, Clerk, AWS)
    - **Features**: Feature module configurations (incident notifications)

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        # Access integration settings
        if settings.twilio.is_configured:
            sender = settings.twilio.TWILIO_WHATSAPP_NUMBER

        # Access feature settings
        if settings.notifications.DISPATCH_MODE == "background":
            # Detach dispatch from the caller...

        # Check environment
        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    aws: AwsSettings
    clerk: ClerkSettings
    smtp: SmtpSettings
    twilio: TwilioSettings

    # Feature settings
    notifications: NotificationFeatureSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "aws": AwsSettings,
            "clerk": ClerkSettings,
            "smtp": SmtpSettings,
            "twilio": TwilioSettings,
            # Features
            "notifications": NotificationFeatureSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.
    Application code should import it from ``infrastructure.services``:

        from infrastructure.services import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()
