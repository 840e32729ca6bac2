"""Notification channel implementations."""

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.in_app import (
    InAppChannel,
    NotificationRecord,
    NotificationRecordStore,
)
from infrastructure.notifications.channels.whatsapp import WhatsAppChannel

__all__ = [
    "NotificationChannel",
    "EmailChannel",
    "InAppChannel",
    "NotificationRecord",
    "NotificationRecordStore",
    "WhatsAppChannel",
]
