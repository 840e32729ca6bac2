"""Notification service for dependency injection.

Provides a class-based interface to the notification system for easier DI
and testing.
"""

from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import (
    Channel,
    Notification,
    NotificationResult,
    ResolvedRecipient,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from infrastructure.notifications.channels.base import NotificationChannel
    from infrastructure.notifications.channels.in_app import NotificationRecordStore


class NotificationService:
    """Class-based notification service.

    A thin facade over NotificationDispatcher that wires the default
    channels from settings.

    Usage:
        from infrastructure.services import get_notification_service

        service = get_notification_service()
        results = service.dispatch(notification, recipients)

        # Direct instantiation
        service = NotificationService(settings, record_store=store)
    """

    def __init__(
        self,
        settings: "Settings",
        channels: Optional[Dict[Channel, "NotificationChannel"]] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        record_store: Optional["NotificationRecordStore"] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            channels: Optional mapping of Channel to NotificationChannel.
                If not provided, creates email and WhatsApp channels from
                settings, plus the in-app channel when ``record_store`` is given.
            dispatcher: Optional pre-configured NotificationDispatcher instance.
            record_store: Store receiving in-app notification records.
        """
        if dispatcher is None:
            if channels is None:
                # Import here to avoid circular dependency at module level
                from infrastructure.clients.smtp import SmtpClient
                from infrastructure.clients.twilio import TwilioClient
                from infrastructure.notifications.channels.email import EmailChannel
                from infrastructure.notifications.channels.in_app import InAppChannel
                from infrastructure.notifications.channels.whatsapp import (
                    WhatsAppChannel,
                )

                channels = {
                    Channel.EMAIL: EmailChannel(SmtpClient(settings)),
                    Channel.WHATSAPP: WhatsAppChannel(TwilioClient(settings)),
                }
                if record_store is not None:
                    channels[Channel.IN_APP] = InAppChannel(record_store)

            dispatcher = NotificationDispatcher(
                channels=channels,
                max_workers=settings.notifications.MAX_RECIPIENT_WORKERS,
            )

        self._dispatcher = dispatcher
        self._settings = settings

    def dispatch(
        self,
        notification: Notification,
        recipients: Sequence[ResolvedRecipient],
    ) -> List[NotificationResult]:
        """Deliver a notification to every recipient over its channels.

        Returns:
            One NotificationResult per requested channel per recipient
        """
        return self._dispatcher.dispatch(notification, recipients)

    def register_channel(
        self, channel_name: Channel, channel: "NotificationChannel"
    ) -> None:
        """Register or replace a channel after initialization."""
        self._dispatcher.channels[channel_name] = channel

    def get_channel(self, channel_name: Channel) -> Optional["NotificationChannel"]:
        return self._dispatcher.channels.get(channel_name)

    def list_channels(self) -> List[Channel]:
        return self._dispatcher.get_available_channels()

    def health_check(self) -> Dict[str, bool]:
        """Check health of all channels.

        Returns:
            Dict mapping channel name to health status (True=healthy)
        """
        return self._dispatcher.health_check()

    @property
    def dispatcher(self) -> NotificationDispatcher:
        return self._dispatcher
