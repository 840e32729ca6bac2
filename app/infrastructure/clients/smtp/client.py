"""SMTP client for transactional email delivery.

Builds multipart text+HTML messages and sends them over STARTTLS or
implicit TLS, returning OperationResult instead of raising.
"""

import re
import smtplib
import socket
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import TYPE_CHECKING, Optional

import structlog

from infrastructure.operations import OperationResult

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"[ \t]+")


def html_to_text(html: str) -> str:
    """Derive a plain-text body from HTML by stripping tags."""
    text = _TAG_PATTERN.sub("", html)
    text = _WHITESPACE_PATTERN.sub(" ", text)
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


class SmtpClient:
    """Client for sending email through an SMTP relay.

    Args:
        settings: Settings instance with smtp.* configuration
    """

    def __init__(self, settings: "Settings") -> None:
        smtp = settings.smtp
        self._host = smtp.SMTP_HOST
        self._port = smtp.SMTP_PORT
        self._user = smtp.SMTP_USER
        self._password = smtp.SMTP_PASSWORD
        self._implicit_tls = smtp.SMTP_SECURE
        self._sender = smtp.sender_address
        self._sender_name = smtp.SMTP_FROM_NAME
        self._timeout = smtp.SMTP_TIMEOUT_SECONDS
        self._configured = smtp.is_configured
        self._logger = logger.bind(component="smtp_client")

    def is_configured(self) -> bool:
        return self._configured

    def build_message(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> MIMEMultipart:
        """Build the multipart message with delivery-priority headers."""
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((self._sender_name, self._sender))
        message["To"] = to
        message["Reply-To"] = self._sender
        message["Message-ID"] = make_msgid()
        message["X-Priority"] = "1"
        message["X-MSMail-Priority"] = "High"
        message["Importance"] = "high"
        message["X-Mailer"] = self._sender_name
        message["List-Unsubscribe"] = f"<mailto:{self._sender}?subject=unsubscribe>"

        message.attach(MIMEText(text or html_to_text(html), "plain", "utf-8"))
        message.attach(MIMEText(html, "html", "utf-8"))
        return message

    def _connect(self) -> smtplib.SMTP:
        if self._implicit_tls:
            return smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout)
        server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        try:
            server.starttls()
        except BaseException:
            server.close()
            raise
        return server

    def send_email(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> OperationResult:
        """Send one email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
            text: Optional plain-text body; derived from ``html`` when omitted

        Returns:
            OperationResult with ``{"message_id": ...}`` on success
        """
        if not self._configured:
            return OperationResult.permanent_error(
                "SMTP transport is not configured", error_code="NOT_CONFIGURED"
            )

        log = self._logger.bind(to=to)
        message = self.build_message(to, subject, html, text)

        try:
            server = self._connect()
            try:
                server.login(self._user, self._password)
                server.sendmail(self._sender, [to], message.as_string())
            finally:
                server.quit()
        except smtplib.SMTPAuthenticationError as exc:
            log.error("smtp_authentication_failed", error=str(exc))
            return OperationResult.permanent_error(
                "SMTP authentication failed", error_code="UNAUTHORIZED"
            )
        except smtplib.SMTPRecipientsRefused as exc:
            log.warning("smtp_recipient_refused", error=str(exc))
            return OperationResult.permanent_error(
                f"SMTP recipient refused: {to}", error_code="RECIPIENT_REFUSED"
            )
        except (smtplib.SMTPException, socket.error) as exc:
            log.warning("smtp_send_failed", error=str(exc))
            return OperationResult.transient_error(
                f"SMTP delivery failed: {type(exc).__name__}: {exc}",
                error_code="SMTP_ERROR",
            )

        message_id = message["Message-ID"]
        log.info("smtp_message_sent", message_id=message_id)
        return OperationResult.success(
            data={"message_id": message_id}, message="Email sent"
        )

    def healthcheck(self) -> OperationResult:
        """Open a session and issue NOOP."""
        if not self._configured:
            return OperationResult.permanent_error(
                "SMTP transport is not configured", error_code="NOT_CONFIGURED"
            )
        try:
            server = self._connect()
            try:
                server.noop()
            finally:
                server.quit()
        except (smtplib.SMTPException, socket.error) as exc:
            return OperationResult.transient_error(
                f"SMTP server unreachable: {exc}", error_code="SMTP_ERROR"
            )
        return OperationResult.success(message="SMTP server reachable")
