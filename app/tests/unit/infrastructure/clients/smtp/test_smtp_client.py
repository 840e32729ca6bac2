"""Unit tests for the SMTP client."""

import smtplib
import socket
from unittest.mock import patch

import pytest

from infrastructure.clients.smtp import SmtpClient
from infrastructure.clients.smtp.client import html_to_text
from infrastructure.operations import OperationStatus


@pytest.mark.unit
class TestHtmlToText:
    def test_strips_tags_and_blank_lines(self):
        html = "<h1>Titel</h1>\n\n<p>Regel   een</p>\n<p>Regel twee</p>"

        assert html_to_text(html) == "Titel\nRegel een\nRegel twee"


@pytest.mark.unit
class TestBuildMessage:
    def test_headers(self, mock_settings):
        message = SmtpClient(mock_settings).build_message(
            "jan@example.com", "Onderwerp", "<p>Hallo</p>"
        )

        assert message["Subject"] == "Onderwerp"
        assert message["From"] == "AI Group Platform <alerts@example.com>"
        assert message["To"] == "jan@example.com"
        assert message["Reply-To"] == "alerts@example.com"
        assert message["X-Priority"] == "1"
        assert message["Importance"] == "high"
        assert message["List-Unsubscribe"] == (
            "<mailto:alerts@example.com?subject=unsubscribe>"
        )
        assert message["Message-ID"]

    def test_plain_text_part_derived_from_html(self, mock_settings):
        message = SmtpClient(mock_settings).build_message(
            "jan@example.com", "Onderwerp", "<p>Hallo</p>"
        )

        plain, html = message.get_payload()
        assert plain.get_content_type() == "text/plain"
        assert plain.get_payload(decode=True).decode() == "Hallo"
        assert html.get_content_type() == "text/html"

    def test_explicit_text_part(self, mock_settings):
        message = SmtpClient(mock_settings).build_message(
            "jan@example.com", "Onderwerp", "<p>Hallo</p>", text="Tekst"
        )

        plain, _ = message.get_payload()
        assert plain.get_payload(decode=True).decode() == "Tekst"


@pytest.mark.unit
class TestSendEmail:
    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_sends_over_starttls(self, mock_smtp, mock_settings):
        server = mock_smtp.return_value

        result = SmtpClient(mock_settings).send_email(
            "jan@example.com", "Onderwerp", "<p>Hallo</p>"
        )

        assert result.is_success
        assert result.data["message_id"]
        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=30)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("alerts@example.com", "smtp-password")
        sender, recipients, _ = server.sendmail.call_args.args
        assert sender == "alerts@example.com"
        assert recipients == ["jan@example.com"]
        server.quit.assert_called_once()

    @patch("infrastructure.clients.smtp.client.smtplib.SMTP_SSL")
    def test_implicit_tls(self, mock_smtp_ssl, mock_settings):
        mock_settings.smtp.SMTP_SECURE = True
        mock_settings.smtp.SMTP_PORT = 465

        result = SmtpClient(mock_settings).send_email(
            "jan@example.com", "Onderwerp", "<p>Hallo</p>"
        )

        assert result.is_success
        mock_smtp_ssl.assert_called_once_with("smtp.example.com", 465, timeout=30)
        mock_smtp_ssl.return_value.starttls.assert_not_called()

    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_authentication_failure_is_permanent(self, mock_smtp, mock_settings):
        mock_smtp.return_value.login.side_effect = smtplib.SMTPAuthenticationError(
            535, b"bad credentials"
        )

        result = SmtpClient(mock_settings).send_email("jan@example.com", "S", "<p/>")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "UNAUTHORIZED"
        mock_smtp.return_value.quit.assert_called_once()

    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_refused_recipient(self, mock_smtp, mock_settings):
        mock_smtp.return_value.sendmail.side_effect = smtplib.SMTPRecipientsRefused(
            {"jan@example.com": (550, b"no such user")}
        )

        result = SmtpClient(mock_settings).send_email("jan@example.com", "S", "<p/>")

        assert result.error_code == "RECIPIENT_REFUSED"

    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_connection_failure_is_transient(self, mock_smtp, mock_settings):
        mock_smtp.side_effect = socket.timeout("timed out")

        result = SmtpClient(mock_settings).send_email("jan@example.com", "S", "<p/>")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "SMTP_ERROR"

    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_starttls_failure_closes_socket(self, mock_smtp, mock_settings):
        server = mock_smtp.return_value
        server.starttls.side_effect = smtplib.SMTPNotSupportedError(
            "STARTTLS extension not supported by server."
        )

        result = SmtpClient(mock_settings).send_email("jan@example.com", "S", "<p/>")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        server.close.assert_called_once()
        server.login.assert_not_called()

    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_not_configured(self, mock_smtp, mock_settings):
        mock_settings.smtp.is_configured = False

        result = SmtpClient(mock_settings).send_email("jan@example.com", "S", "<p/>")

        assert result.error_code == "NOT_CONFIGURED"
        mock_smtp.assert_not_called()


@pytest.mark.unit
class TestHealthcheck:
    @patch("infrastructure.clients.smtp.client.smtplib.SMTP")
    def test_noop(self, mock_smtp, mock_settings):
        result = SmtpClient(mock_settings).healthcheck()

        assert result.is_success
        mock_smtp.return_value.noop.assert_called_once()
