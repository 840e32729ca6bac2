"""Notification system core models.

Channel-agnostic notification models for centralized dispatch.
Features define message content, infrastructure handles delivery.

Uses Pydantic BaseModel for:
- RFC 5322 compliant email validation (EmailStr)
- Runtime input validation
- Type safety with proper error messages
"""

import re
from typing import Optional, Dict, Any, FrozenSet
from enum import Enum
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

_PHONE_SEPARATORS = re.compile(r"[\s\-().]")


class Channel(str, Enum):
    """Delivery channels.

    Declaration order is the order in which a recipient's channel attempts
    are reported.
    """

    IN_APP = "in_app"
    EMAIL = "email"
    WHATSAPP = "whatsapp"


class NotificationStatus(Enum):
    """Outcome of one channel attempt for one recipient."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


class ResolvedRecipient(BaseModel):
    """A concrete recipient for one dispatch.

    ``user_id`` is the identity-provider id and the deduplication key: a
    dispatch holds at most one ResolvedRecipient per user, with ``channels``
    being the union of every rule that reached that user.

    Attributes:
        user_id: Identity-provider user id
        email: Delivery email address, if one is known
        phone_number: Delivery phone number, if one is known
        channels: Channels requested for this user
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    channels: FrozenSet[Channel] = Field(default_factory=frozenset)

    @field_validator("phone_number")
    @classmethod
    def normalize_phone_number(cls, v: Optional[str]) -> Optional[str]:
        """Strip separators; an empty number becomes None."""
        if v is None:
            return v
        v = _PHONE_SEPARATORS.sub("", v)
        return v or None

    def wants(self, channel: Channel) -> bool:
        return channel in self.channels


class Notification(BaseModel):
    """Channel-agnostic notification content.

    Each channel picks the fields it renders: the in-app channel stores
    ``title`` and ``message``, email sends ``subject`` with ``html_body`` and
    ``text_body``, WhatsApp sends ``short_message``.

    Example:
        notification = Notification(
            notification_type="incident",
            title="Nieuw incident gemeld",
            message="Er is een incident gemeld: Val van steiger",
            subject="🚨 Ernstig incident gemeld: Val van steiger",
            html_body="<p>...</p>",
            short_message="🚨 Ernstig incident ...",
            reference_id=42,
        )
    """

    notification_type: str = "incident"
    title: str
    message: str
    subject: str
    html_body: str
    text_body: Optional[str] = None
    short_message: str
    reference_id: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("message", "title", "subject")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Notification text fields cannot be empty")
        return v


class NotificationResult(BaseModel):
    """Result of one channel attempt for one recipient.

    Attributes:
        channel: Channel attempted
        recipient_id: User id of the recipient
        status: SENT, FAILED or SKIPPED
        message: Human-readable result message
        error_code: Optional machine error code for failures and skips
        external_id: Provider id of the delivered message (Twilio SID, ...)
    """

    channel: Channel
    recipient_id: str
    status: NotificationStatus
    message: str
    error_code: Optional[str] = None
    external_id: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == NotificationStatus.SENT
