"""Transactional email rendering and delivery through SendGrid."""

from __future__ import annotations

import html
import logging
from string import Template
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..core import QuestError

log = logging.getLogger("questlive.email")

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"

REGISTRATION_CONFIRMATION = "registration-confirmation"
SESSION_REMINDER = "session-reminder"

SUBJECTS = {
    REGISTRATION_CONFIRMATION: "You're registered for Quest Live!",
    SESSION_REMINDER: "Reminder: Quest Live session tomorrow!",
}

REQUIRED_DATA_FIELDS = ("name", "sessionDate", "sessionTime")

_BASE_STYLES = """
    body { font-family: 'Lato', Arial, sans-serif; background-color: #0c253f; margin: 0; padding: 40px 20px; }
    .container { max-width: 600px; margin: 0 auto; background-color: #1a3a5c; border-radius: 16px; padding: 40px; }
    .logo { text-align: center; margin-bottom: 30px; }
    .logo img { width: 150px; }
    h1 { color: #ffffff; font-size: 28px; margin-bottom: 20px; text-align: center; }
    .highlight { color: #00d26a; }
    p { color: #b0c4de; font-size: 16px; line-height: 1.6; margin-bottom: 16px; }
    .details-box { background-color: #0c253f; border-radius: 12px; padding: 24px; margin: 24px 0; }
    .footer { text-align: center; color: #7a8fa6; font-size: 14px; margin-top: 40px; padding-top: 20px; border-top: 1px solid #2a4a6c; }
"""

_HTML_SHELL = Template("""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>$title</title>
  <style>$styles</style>
</head>
<body>
  <div class="container">
    <div class="logo">
      <img src="https://quest.fwd.app/logo_fn.svg" alt="Forward Networks" />
    </div>

    <h1>$heading</h1>

    <p>Hi $name,</p>

    <p>$intro</p>

    <div class="details-box">
      <table width="100%" cellpadding="0" cellspacing="0">
        <tr>
          <td style="color: #7a8fa6; padding-bottom: 12px;">Date</td>
          <td style="color: #ffffff; font-weight: bold; text-align: right; padding-bottom: 12px;">$session_date</td>
        </tr>
        <tr>
          <td style="color: #7a8fa6; padding-bottom: 12px;">Time</td>
          <td style="color: #ffffff; font-weight: bold; text-align: right; padding-bottom: 12px;">$session_time CET</td>
        </tr>
        <tr>
          <td style="color: #7a8fa6;">Location</td>
          <td style="color: #ffffff; font-weight: bold; text-align: right;">Forward Networks Booth, RAI Amsterdam</td>
        </tr>
      </table>
    </div>

    <p><strong style="color: #ffffff;">$list_title</strong></p>
    <ul style="color: #b0c4de; line-height: 1.8;">
$items
    </ul>
$closing
    <div class="footer">
      <p>$signoff</p>
      <p>Forward Networks Team</p>
    </div>
  </div>
</body>
</html>""")

_TEXT_SHELL = Template("""Hi $name,

$headline

Session Details:
- Date: $session_date
- Time: $session_time CET
- Location: Forward Networks Booth, RAI Amsterdam
$extra
$signoff
Forward Networks Team
""")

_CONTENT: Dict[str, Dict[str, Any]] = {
    REGISTRATION_CONFIRMATION: {
        "title": "Registration Confirmed",
        "heading": 'You\'re In! <span class="highlight">Quest Live</span> Awaits',
        "intro": (
            "Great news! Your spot for Quest Live at Cisco Live EMEA is confirmed. "
            "Get ready for a fun, fast-paced network challenge!"
        ),
        "list_title": "What to expect:",
        "items": [
            "5 players compete head-to-head",
            "5 network challenges to solve",
            "Live leaderboard for spectators",
            "Prizes for the fastest finishers!",
        ],
        "closing": (
            "Arrive 5 minutes early to check in at our booth. "
            "We'll assign you a fun player name and get you set up!"
        ),
        "signoff": "See you at the booth!",
        "headline": "Your Quest Live registration is confirmed!",
        "text_signoff": "See you there!",
    },
    SESSION_REMINDER: {
        "title": "Quest Live Reminder",
        "heading": 'Reminder: <span class="highlight">Quest Live</span> Tomorrow!',
        "intro": (
            "Just a friendly reminder that your Quest Live session is tomorrow! "
            "Don't miss your chance to compete."
        ),
        "list_title": "Remember:",
        "items": [
            "Arrive 5 minutes early for check-in",
            "Find the Forward Networks booth",
            "Get ready to compete!",
        ],
        "closing": "",
        "signoff": "Good luck!",
        "headline": "Reminder: Your Quest Live session is tomorrow!",
        "text_signoff": "Good luck!",
    },
}


class EmailDeliveryError(QuestError):
    """The email provider rejected the message."""

    def __init__(self, status_code: int, details: str) -> None:
        self.status_code = status_code
        self.details = details
        super().__init__(f"SendGrid responded {status_code}")


def missing_fields(payload: Mapping[str, Any]) -> bool:
    """True when the request lacks a top-level or template data field."""

    if not all(payload.get(key) for key in ("to", "subject", "template", "data")):
        return True
    data = payload["data"]
    if not isinstance(data, Mapping):
        return True
    return not all(data.get(key) for key in REQUIRED_DATA_FIELDS)


def render_email(template: str, data: Mapping[str, Any]) -> Tuple[str, str]:
    """Return ``(html, text)`` bodies for ``template``."""

    content = _CONTENT.get(template)
    if content is None:
        raise ValueError(f"Unknown template: {template}")

    safe = {key: html.escape(str(data.get(key, ""))) for key in REQUIRED_DATA_FIELDS}
    items = "\n".join(f"      <li>{item}</li>" for item in content["items"])
    closing = f"\n    <p>{content['closing']}</p>\n" if content["closing"] else ""
    html_body = _HTML_SHELL.substitute(
        title=content["title"],
        styles=_BASE_STYLES,
        heading=content["heading"],
        name=safe["name"],
        intro=content["intro"],
        session_date=safe["sessionDate"],
        session_time=safe["sessionTime"],
        list_title=content["list_title"],
        items=items,
        closing=closing,
        signoff=content["signoff"],
    )

    if template == REGISTRATION_CONFIRMATION:
        extra = "\nWhat to expect:\n" + "".join(f"- {item}\n" for item in content["items"])
        extra += "\nArrive 5 minutes early to check in at our booth.\n"
    else:
        extra = "\nRemember to arrive 5 minutes early for check-in.\n"
    text_body = _TEXT_SHELL.substitute(
        name=data.get("name", ""),
        headline=content["headline"],
        session_date=data.get("sessionDate", ""),
        session_time=data.get("sessionTime", ""),
        extra=extra,
        signoff=content["text_signoff"],
    )
    return html_body, text_body


class SendGridMailer:
    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str,
        timeout: float = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        self._transport = transport

    async def send(self, to: str, subject: str, html_body: str, text_body: str) -> None:
        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text_body},
                {"type": "text/html", "value": html_body},
            ],
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                SENDGRID_SEND_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )
        if response.is_error:
            log.error("SendGrid error: %s", response.text)
            raise EmailDeliveryError(response.status_code, response.text)
        log.info("Sent %s to %s", subject, to)


__all__ = [
    "EmailDeliveryError",
    "REGISTRATION_CONFIRMATION",
    "SENDGRID_SEND_URL",
    "SESSION_REMINDER",
    "SUBJECTS",
    "SendGridMailer",
    "missing_fields",
    "render_email",
]
