"""Notification channel abstract base class.

All channel implementations (in-app, email, WhatsApp) implement this
interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from infrastructure.notifications.models import (
    Channel,
    Notification,
    NotificationResult,
    NotificationStatus,
    ResolvedRecipient,
)
from infrastructure.operations import OperationResult


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel delivers through one transport:
    - InAppChannel: notification record store
    - EmailChannel: SMTP
    - WhatsAppChannel: Twilio Messages API

    ``send`` must never raise for expected failures; it reports them as a
    NotificationResult with FAILED or SKIPPED status. The dispatcher still
    guards against unexpected exceptions.
    """

    @property
    @abstractmethod
    def channel_name(self) -> Channel:
        """Channel identifier used for routing and logging."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the transport has the credentials it needs."""
        pass

    @abstractmethod
    def resolve_recipient(self, recipient: ResolvedRecipient) -> OperationResult:
        """Resolve the channel-specific address of a recipient.

        Returns:
            OperationResult with ``{"address": ...}`` in data, or NOT_FOUND
            when the recipient has no address for this channel
        """
        pass

    @abstractmethod
    def send(
        self, notification: Notification, recipient: ResolvedRecipient
    ) -> NotificationResult:
        """Deliver a notification to one recipient."""
        pass

    @abstractmethod
    def health_check(self) -> OperationResult:
        """Check channel health (API connectivity, credentials)."""
        pass

    def _result(
        self,
        recipient: ResolvedRecipient,
        status: NotificationStatus,
        message: str,
        error_code: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> NotificationResult:
        return NotificationResult(
            channel=self.channel_name,
            recipient_id=recipient.user_id,
            status=status,
            message=message,
            error_code=error_code,
            external_id=external_id,
        )

    def _from_operation(
        self,
        recipient: ResolvedRecipient,
        result: OperationResult,
        external_id_key: str,
    ) -> NotificationResult:
        """Convert a transport OperationResult into a NotificationResult."""
        if result.is_success:
            data = result.data or {}
            return self._result(
                recipient,
                NotificationStatus.SENT,
                result.message,
                external_id=data.get(external_id_key),
            )
        return self._result(
            recipient,
            NotificationStatus.FAILED,
            result.message,
            error_code=result.error_code,
        )
