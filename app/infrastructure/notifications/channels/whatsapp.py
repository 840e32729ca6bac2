"""WhatsApp channel implementation using Twilio."""

import structlog
from infrastructure.clients.twilio import TwilioClient
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import (
    Channel,
    Notification,
    NotificationResult,
    NotificationStatus,
    ResolvedRecipient,
)
from infrastructure.operations import OperationResult, OperationStatus

logger = structlog.get_logger()


class WhatsAppChannel(NotificationChannel):
    """WhatsApp notification channel using the Twilio Messages API.

    Sends ``notification.short_message`` to the recipient's enriched phone
    number.
    """

    def __init__(self, client: TwilioClient):
        self._client = client
        logger.info(
            "initialized_whatsapp_channel",
            backend="twilio",
            configured=client.is_configured(),
        )

    @property
    def channel_name(self) -> Channel:
        return Channel.WHATSAPP

    def is_configured(self) -> bool:
        return self._client.is_configured()

    def resolve_recipient(self, recipient: ResolvedRecipient) -> OperationResult:
        if not recipient.phone_number:
            return OperationResult.error(
                OperationStatus.NOT_FOUND,
                "Recipient has no phone number",
                error_code="MISSING_PHONE",
            )
        return OperationResult.success(data={"address": recipient.phone_number})

    def send(
        self, notification: Notification, recipient: ResolvedRecipient
    ) -> NotificationResult:
        resolved = self.resolve_recipient(recipient)
        if not resolved.is_success:
            return self._result(
                recipient,
                NotificationStatus.SKIPPED,
                resolved.message,
                error_code=resolved.error_code,
            )

        result = self._client.send_whatsapp(
            to=resolved.data["address"], body=notification.short_message
        )
        return self._from_operation(recipient, result, external_id_key="sid")

    def health_check(self) -> OperationResult:
        return self._client.healthcheck()
