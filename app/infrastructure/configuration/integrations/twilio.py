"""Twilio integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class TwilioSettings(IntegrationSettings):
    """Twilio WhatsApp messaging configuration.

    Environment Variables:
        TWILIO_ACCOUNT_SID: Twilio account SID
        TWILIO_AUTH_TOKEN: Twilio auth token
        TWILIO_WHATSAPP_NUMBER: WhatsApp-enabled sender number
        TWILIO_API_URL: Twilio REST API base URL
        TWILIO_TIMEOUT_SECONDS: HTTP timeout for Twilio API calls

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.twilio.is_configured:
            sender = settings.twilio.TWILIO_WHATSAPP_NUMBER
        ```
    """

    TWILIO_ACCOUNT_SID: str | None = Field(default=None, alias="TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN: str | None = Field(default=None, alias="TWILIO_AUTH_TOKEN")
    TWILIO_WHATSAPP_NUMBER: str | None = Field(
        default=None, alias="TWILIO_WHATSAPP_NUMBER"
    )
    TWILIO_API_URL: str = Field(
        default="https://api.twilio.com/2010-04-01", alias="TWILIO_API_URL"
    )
    TWILIO_TIMEOUT_SECONDS: int = Field(default=10, alias="TWILIO_TIMEOUT_SECONDS")

    @property
    def is_configured(self) -> bool:
        """Whether account SID, auth token and sender number are all present."""
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_WHATSAPP_NUMBER
        )
