"""Email channel implementation using SMTP."""

import structlog
from infrastructure.clients.smtp import SmtpClient
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


class EmailChannel(NotificationChannel):
    """Email notification channel.

    Sends the notification's subject with its HTML and plain-text bodies
    to the recipient's enriched email address.
    """

    def __init__(self, client: SmtpClient):
        self._client = client
        logger.info(
            "initialized_email_channel",
            backend="smtp",
            configured=client.is_configured(),
        )

    @property
    def channel_name(self) -> Channel:
        return Channel.EMAIL

    def is_configured(self) -> bool:
        return self._client.is_configured()

    def resolve_recipient(self, recipient: ResolvedRecipient) -> OperationResult:
        if not recipient.email:
            return OperationResult.error(
                OperationStatus.NOT_FOUND,
                "Recipient has no email address",
                error_code="MISSING_EMAIL",
            )
        return OperationResult.success(data={"address": str(recipient.email)})

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

        result = self._client.send_email(
            to=resolved.data["address"],
            subject=notification.subject,
            html=notification.html_body,
            text=notification.text_body,
        )
        return self._from_operation(recipient, result, external_id_key="message_id")

    def health_check(self) -> OperationResult:
        return self._client.healthcheck()
