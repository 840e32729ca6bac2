"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.aws import AwsSettings
from infrastructure.configuration.integrations.clerk import ClerkSettings
from infrastructure.configuration.integrations.smtp import SmtpSettings
from infrastructure.configuration.integrations.twilio import TwilioSettings

__all__ = [
    "AwsSettings",
    "ClerkSettings",
    "SmtpSettings",
    "TwilioSettings",
]
