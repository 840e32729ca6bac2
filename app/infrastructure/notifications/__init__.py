"""Centralized notification delivery.

Provides multi-channel delivery (in-app, email, WhatsApp) with:
- Concurrent delivery per recipient and per channel
- Failure isolation between channels and recipients
- Per-attempt NotificationResult reporting
- Channel health checks

Usage:
    from infrastructure.notifications import (
        Channel,
        Notification,
        ResolvedRecipient,
    )
    from infrastructure.services import get_notification_service

    results = get_notification_service().dispatch(
        notification,
        [ResolvedRecipient(user_id="user_1", email="a@example.com",
                           channels={Channel.EMAIL})],
    )
"""

# Models
from infrastructure.notifications.models import (
    Channel,
    Notification,
    NotificationResult,
    NotificationStatus,
    ResolvedRecipient,
)

# Dispatcher and service
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.service import NotificationService

# Channel interface
from infrastructure.notifications.channels.base import NotificationChannel

# Channel implementations
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.in_app import (
    InAppChannel,
    NotificationRecord,
    NotificationRecordStore,
)
from infrastructure.notifications.channels.whatsapp import WhatsAppChannel

__all__ = [
    # Models
    "Channel",
    "Notification",
    "NotificationResult",
    "NotificationStatus",
    "ResolvedRecipient",
    # Dispatcher and service
    "NotificationDispatcher",
    "NotificationService",
    # Channel interface
    "NotificationChannel",
    # Channel implementations
    "EmailChannel",
    "InAppChannel",
    "NotificationRecord",
    "NotificationRecordStore",
    "WhatsAppChannel",
]
