"""Incident notification content.

Builds the deep link to an incident and renders the in-app, email and
WhatsApp texts of the incident notification. User-facing texts are Dutch.
"""

from html import escape

from infrastructure.notifications import Notification
from modules.incident_notifications.domain.models import Incident

DEFAULT_INCIDENT_PATH_TEMPLATE = "/dashboard/ai-safety/{incident_id}"
PLATFORM_NAME = "AI Group Platform"

IN_APP_TITLE = "Nieuw incident gemeld"

_EMAIL_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{subject}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background-color: #dc2626; color: #ffffff; padding: 20px; border-radius: 8px 8px 0 0; text-align: center;">
    <h1 style="margin: 0; font-size: 24px;">🚨 Ernstig Incident Gemeld</h1>
  </div>
  <div style="background-color: #f9fafb; padding: 30px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 8px 8px;">
    <p style="font-size: 16px; margin-bottom: 20px;">Er is een ernstig incident voorgevallen dat uw aandacht vereist.</p>
    <div style="background-color: #ffffff; padding: 20px; border-left: 4px solid #dc2626; margin-bottom: 20px;">
      <h2 style="margin-top: 0; color: #dc2626; font-size: 18px;">{title}</h2>
      <p style="margin: 5px 0;"><strong>Incident ID:</strong> {incident_code}</p>
{location_html}    </div>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{incident_url}" style="background-color: #dc2626; color: #ffffff; padding: 12px 30px; text-decoration: none; border-radius: 6px; display: inline-block; font-weight: bold;">Bekijk Incident</a>
    </div>
    <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 30px 0;">
    <p style="font-size: 12px; color: #6b7280; text-align: center;">
      Deze email is automatisch gegenereerd door het {platform}.<br>
      Als u deze notificaties niet meer wilt ontvangen, neem dan contact op met uw beheerder.
    </p>
  </div>
</body>
</html>
"""

_EMAIL_LOCATION_HTML = (
    '      <p style="margin: 5px 0;"><strong>Locatie:</strong> {location}</p>\n'
)


def build_incident_url(
    base_url: str,
    incident_id: int,
    path_template: str = DEFAULT_INCIDENT_PATH_TEMPLATE,
) -> str:
    """Deep link to the incident detail view.

    >>> build_incident_url("https://app.example.com/", 42)
    'https://app.example.com/dashboard/ai-safety/42'
    """
    path = path_template.format(incident_id=incident_id)
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def email_subject(incident: Incident) -> str:
    return f"🚨 Ernstig incident gemeld: {incident.title}"


def in_app_message(incident: Incident) -> str:
    message = f"Er is een incident gemeld: {incident.title}"
    if incident.location:
        message += f" op locatie: {incident.location}"
    return message


def render_email_html(incident: Incident, incident_url: str) -> str:
    """Render the HTML email body. Incident fields are HTML-escaped."""
    location_html = (
        _EMAIL_LOCATION_HTML.format(location=escape(incident.location))
        if incident.location
        else ""
    )
    return _EMAIL_HTML_TEMPLATE.format(
        subject=escape(email_subject(incident)),
        title=escape(incident.title),
        incident_code=escape(incident.incident_code),
        location_html=location_html,
        incident_url=escape(incident_url, quote=True),
        platform=PLATFORM_NAME,
    )


def render_email_text(incident: Incident, incident_url: str) -> str:
    lines = [
        "🚨 ERNSTIG INCIDENT GEMELD",
        "",
        "Er is een ernstig incident voorgevallen dat uw aandacht vereist.",
        "",
        incident.title,
        f"Incident ID: {incident.incident_code}",
    ]
    if incident.location:
        lines.append(f"Locatie: {incident.location}")
    lines += [
        "",
        f"Bekijk het incident: {incident_url}",
        "",
        "---",
        f"Deze email is automatisch gegenereerd door het {PLATFORM_NAME}.",
        "Als u deze notificaties niet meer wilt ontvangen, "
        "neem dan contact op met uw beheerder.",
    ]
    return "\n".join(lines)


def render_whatsapp_message(incident: Incident, incident_url: str) -> str:
    lines = [
        "🚨 ERNSTIG INCIDENT GEMELD 🚨",
        "",
        "Er is een ernstig incident voorgevallen:",
        "",
        incident.title,
        "",
        f"Incident ID: {incident.incident_code}",
    ]
    if incident.location:
        lines.append(f"Locatie: {incident.location}")
    lines += [
        "",
        "Bekijk details in de app:",
        incident_url,
        "",
        "---",
        PLATFORM_NAME,
    ]
    return "\n".join(lines)


def build_incident_notification(incident: Incident, url: str) -> Notification:
    """Build the channel-agnostic notification for an incident.

    Args:
        incident: Incident snapshot
        url: Deep link to the incident, see build_incident_url
    """
    return Notification(
        notification_type="incident",
        title=IN_APP_TITLE,
        message=in_app_message(incident),
        subject=email_subject(incident),
        html_body=render_email_html(incident, url),
        text_body=render_email_text(incident, url),
        short_message=render_whatsapp_message(incident, url),
        reference_id=incident.id,
        metadata={
            "incident_code": incident.incident_code,
            "severity": incident.severity.value,
            "incident_url": url,
        },
    )
