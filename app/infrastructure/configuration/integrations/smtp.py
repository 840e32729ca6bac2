"""SMTP integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SmtpSettings(IntegrationSettings):
    """SMTP email transport configuration.

    Environment Variables:
        SMTP_HOST: SMTP server hostname
        SMTP_PORT: SMTP server port (default: 587)
        SMTP_USER: SMTP login user
        SMTP_PASSWORD: SMTP login password
        SMTP_SECURE: Use implicit TLS (SMTPS) instead of STARTTLS
        SMTP_FROM: Sender address (defaults to SMTP_USER)
        SMTP_FROM_NAME: Sender display name
        SMTP_TIMEOUT_SECONDS: Socket timeout for SMTP sessions

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.smtp.is_configured:
            host = settings.smtp.SMTP_HOST
        ```
    """

    SMTP_HOST: str | None = Field(default=None, alias="SMTP_HOST")
    SMTP_PORT: int = Field(default=587, alias="SMTP_PORT")
    SMTP_USER: str | None = Field(default=None, alias="SMTP_USER")
    SMTP_PASSWORD: str | None = Field(default=None, alias="SMTP_PASSWORD")
    SMTP_SECURE: bool = Field(default=False, alias="SMTP_SECURE")
    SMTP_FROM: str | None = Field(default=None, alias="SMTP_FROM")
    SMTP_FROM_NAME: str = Field(default="AI Group Platform", alias="SMTP_FROM_NAME")
    SMTP_TIMEOUT_SECONDS: int = Field(default=30, alias="SMTP_TIMEOUT_SECONDS")

    @property
    def is_configured(self) -> bool:
        """Whether host and credentials are all present."""
        return bool(self.SMTP_HOST and self.SMTP_USER and self.SMTP_PASSWORD)

    @property
    def sender_address(self) -> str | None:
        return self.SMTP_FROM or self.SMTP_USER
