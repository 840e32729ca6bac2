"""Twilio Messages API client for WhatsApp delivery.

Sends WhatsApp messages through the Twilio REST API with consistent error
handling and OperationResult return types.
"""

from typing import TYPE_CHECKING, Optional

import requests
import structlog

from infrastructure.operations import OperationResult, classify_http_error

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

WHATSAPP_PREFIX = "whatsapp:"


def to_whatsapp_address(number: str) -> str:
    """Prefix a phone number with ``whatsapp:`` unless already prefixed."""
    number = number.strip()
    if number.startswith(WHATSAPP_PREFIX):
        return number
    return f"{WHATSAPP_PREFIX}{number}"


class TwilioClient:
    """Client for the Twilio Messages API.

    Args:
        settings: Settings instance with twilio.* credentials
        session: Optional requests session (shared connection pool)
    """

    def __init__(
        self, settings: "Settings", session: Optional[requests.Session] = None
    ) -> None:
        self._account_sid = settings.twilio.TWILIO_ACCOUNT_SID
        self._auth_token = settings.twilio.TWILIO_AUTH_TOKEN
        self._from_number = settings.twilio.TWILIO_WHATSAPP_NUMBER
        self._api_url = settings.twilio.TWILIO_API_URL.rstrip("/")
        self._timeout = settings.twilio.TWILIO_TIMEOUT_SECONDS
        self._configured = settings.twilio.is_configured
        self._session = session or requests.Session()
        self._logger = logger.bind(component="twilio_client")

    def is_configured(self) -> bool:
        return self._configured

    def send_whatsapp(self, to: str, body: str) -> OperationResult:
        """Send a WhatsApp message.

        Args:
            to: Recipient phone number, with or without ``whatsapp:`` prefix
            body: Message text

        Returns:
            OperationResult with ``{"sid": ...}`` on HTTP 201, or a classified
            error
        """
        if not self._configured:
            return OperationResult.permanent_error(
                "Twilio WhatsApp is not configured", error_code="NOT_CONFIGURED"
            )

        log = self._logger.bind(to=to)
        url = f"{self._api_url}/Accounts/{self._account_sid}/Messages.json"

        try:
            response = self._session.post(
                url,
                data={
                    "From": to_whatsapp_address(self._from_number),
                    "To": to_whatsapp_address(to),
                    "Body": body,
                },
                auth=(self._account_sid, self._auth_token),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            result = classify_http_error(exc, provider="Twilio")
            log.warning(
                "twilio_send_failed",
                status=result.status.value,
                error_code=result.error_code,
                error=str(exc),
            )
            return result

        if response.status_code != 201:
            log.warning("twilio_unexpected_status", status_code=response.status_code)
            return OperationResult.permanent_error(
                f"Twilio returned unexpected status {response.status_code}",
                error_code="UNEXPECTED_STATUS",
            )

        sid = response.json().get("sid")
        log.info("twilio_message_sent", message_sid=sid)
        return OperationResult.success(data={"sid": sid}, message="Message sent")

    def healthcheck(self) -> OperationResult:
        """Check that the account endpoint accepts the credentials."""
        if not self._configured:
            return OperationResult.permanent_error(
                "Twilio WhatsApp is not configured", error_code="NOT_CONFIGURED"
            )
        try:
            response = self._session.get(
                f"{self._api_url}/Accounts/{self._account_sid}.json",
                auth=(self._account_sid, self._auth_token),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            return classify_http_error(exc, provider="Twilio")
        return OperationResult.success(message="Twilio API reachable")
