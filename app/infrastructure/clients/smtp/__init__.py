"""SMTP client for infrastructure layer."""

from infrastructure.clients.smtp.client import SmtpClient, html_to_text

__all__ = ["SmtpClient", "html_to_text"]
