"""Uniform result of an integration call.

Identity lookups, SMTP and Twilio sends and DynamoDB calls never raise into
the notification pipeline; they return an OperationResult instead.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one integration call.

    Attributes:
        status: High-level outcome
        message: Human-readable message for logs
        data: Payload of a successful call (profile, message SID, items, ...)
        error_code: Machine-readable failure code (``RATE_LIMITED``, ...)
        retry_after: Seconds to wait before retrying a rate-limited call
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_retryable(self) -> bool:
        """True for failures that may succeed when the call is repeated."""
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Failure with an explicit status."""
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Retryable failure: timeouts, throttling, provider outages."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after
        )

    @classmethod
    def rate_limited(cls, message: str, retry_after: int = 60) -> "OperationResult":
        return cls.transient_error(
            message, error_code="RATE_LIMITED", retry_after=retry_after
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Failure that repeating the call will not fix: bad input, denied access."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)

    @classmethod
    def unauthorized(cls, message: str) -> "OperationResult":
        return cls.error(OperationStatus.UNAUTHORIZED, message, "UNAUTHORIZED")

    @classmethod
    def not_found(cls, message: str) -> "OperationResult":
        return cls.error(OperationStatus.NOT_FOUND, message, "NOT_FOUND")
