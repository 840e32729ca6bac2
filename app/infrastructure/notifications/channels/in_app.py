"""In-app channel implementation writing notification records."""

from datetime import datetime, timezone
from typing import Optional, Protocol

import structlog
from pydantic import BaseModel, Field

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import (
    Channel,
    Notification,
    NotificationResult,
    NotificationStatus,
    ResolvedRecipient,
)
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class NotificationRecord(BaseModel):
    """An in-app notification row. Written once, never updated."""

    user_id: str
    type: str
    title: str
    message: str
    incident_id: Optional[int] = None
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationRecordStore(Protocol):
    """Append-only store of in-app notification records."""

    def insert(self, record: NotificationRecord) -> OperationResult: ...

    def healthcheck(self) -> OperationResult: ...


class InAppChannel(NotificationChannel):
    """In-app notification channel.

    Always configured: every recipient has a user id to attach a record to.
    """

    def __init__(self, store: NotificationRecordStore):
        self._store = store
        logger.info("initialized_in_app_channel", store=type(store).__name__)

    @property
    def channel_name(self) -> Channel:
        return Channel.IN_APP

    def is_configured(self) -> bool:
        return True

    def resolve_recipient(self, recipient: ResolvedRecipient) -> OperationResult:
        return OperationResult.success(data={"address": recipient.user_id})

    def send(
        self, notification: Notification, recipient: ResolvedRecipient
    ) -> NotificationResult:
        record = NotificationRecord(
            user_id=recipient.user_id,
            type=notification.notification_type,
            title=notification.title,
            message=notification.message,
            incident_id=notification.reference_id,
        )
        result = self._store.insert(record)
        if result.is_success:
            return self._result(
                recipient, NotificationStatus.SENT, "Notification record stored"
            )
        return self._result(
            recipient,
            NotificationStatus.FAILED,
            result.message,
            error_code=result.error_code,
        )

    def health_check(self) -> OperationResult:
        return self._store.healthcheck()
