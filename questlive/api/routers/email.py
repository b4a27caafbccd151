"""Public email-sending function used by the registration pages."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from ...services import EmailDeliveryError, SendGridMailer, missing_fields, render_email
from ...services.email import SUBJECTS
from ..deps import get_mailer

log = logging.getLogger("questlive.email")

router = APIRouter(tags=["email"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _reply(status_code: int, content: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(content, status_code=status_code, headers=CORS_HEADERS)


@router.options("/api/send-email")
def send_email_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/api/send-email")
async def send_email(request: Request, mailer: SendGridMailer = Depends(get_mailer)):
    """Render a templated email and hand it to SendGrid."""

    try:
        payload = await request.json()
    except ValueError:
        return _reply(400, {"error": "Invalid JSON body"})

    if not isinstance(payload, dict) or missing_fields(payload):
        return _reply(400, {"error": "Missing required fields"})

    template = payload["template"]
    if not isinstance(template, str) or template not in SUBJECTS:
        return _reply(400, {"error": "Unknown template"})

    try:
        html_body, text_body = render_email(template, payload["data"])
        await mailer.send(str(payload["to"]), str(payload["subject"]), html_body, text_body)
    except EmailDeliveryError as exc:
        return _reply(500, {"error": "Failed to send email", "details": exc.details})
    except Exception:
        log.exception("Email function error")
        return _reply(500, {"error": "Internal server error"})

    return _reply(200, {"success": True})


__all__ = ["router"]
