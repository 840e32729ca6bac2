"""Twilio Messages API client for infrastructure layer."""

from infrastructure.clients.twilio.client import TwilioClient, to_whatsapp_address

__all__ = ["TwilioClient", "to_whatsapp_address"]
