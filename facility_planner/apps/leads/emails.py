"""Transactional email through the Resend HTTP API.

Every message is rendered from a Django template under
`templates/<app>/emails/` and posted to Resend with `requests`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import requests
from constance import config
from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone

if TYPE_CHECKING:
    from facility_planner.apps.leads.models import Lead

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class EmailDeliveryError(Exception):
    """Resend rejected the message or could not be reached."""


def _message_id(response: requests.Response) -> str:
    """Resend message id from an accepted response, or "" if the body is unreadable."""
    try:
        body = response.json()
    except ValueError:
        logger.warning("Resend accepted the message but returned a non-JSON body")
        return ""
    message_id = body.get("id") if isinstance(body, dict) else None
    return message_id if isinstance(message_id, str) else ""


def send_email(
    to: str | Iterable[str],
    subject: str,
    html: str,
    *,
    from_email: str | None = None,
    reply_to: str | None = None,
) -> str:
    """Send one message and return the Resend message id.

    Raises EmailDeliveryError when the API key is missing or the request fails.
    """
    if not settings.RESEND_API_KEY:
        raise EmailDeliveryError("RESEND_API_KEY is not configured")

    recipients = [to] if isinstance(to, str) else list(to)
    payload: dict[str, Any] = {
        "from": from_email or settings.EMAIL_FROM_CUSTOMER,
        "to": recipients,
        "subject": subject,
        "html": html,
    }
    if reply_to:
        payload["reply_to"] = reply_to

    try:
        response = requests.post(
            RESEND_API_URL,
            json=payload,
            headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
            timeout=10,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise EmailDeliveryError(str(e)) from e

    message_id = _message_id(response)
    logger.info(
        "Email sent",
        extra={"subject": subject, "recipient_count": len(recipients), "message_id": message_id},
    )
    return message_id


def company_notification_recipients() -> list[str]:
    return [addr.strip() for addr in config.COMPANY_NOTIFICATION_EMAILS.split(",") if addr.strip()]


def send_lead_emails(
    lead: Lead,
    facility_details: dict | None = None,
    estimates: dict | None = None,
) -> dict:
    """Send the customer confirmation and the internal new-lead notification.

    A failed confirmation raises EmailDeliveryError. A failed notification is
    logged and reported in the result, since the customer already heard back.
    """
    facility_details = facility_details or {}
    estimates = estimates or {}

    if lead.is_b2b:
        subject = "Thank you for your partnership inquiry"
        template = "leads/emails/b2b_confirmation.html"
    else:
        subject = "Thank you for your facility planning request"
        template = "leads/emails/customer_confirmation.html"

    context = {
        "lead": lead,
        "facility_details": facility_details,
        "estimates": estimates,
        "site_url": settings.SITE_URL,
    }
    customer_email_id = send_email(
        lead.email,
        subject,
        render_to_string(template, context),
        from_email=settings.EMAIL_FROM_CUSTOMER,
        reply_to=settings.EMAIL_REPLY_TO,
    )

    project_type = facility_details.get("project_type") or lead.partnership_type or "Sports Facility"
    company_email_id = ""
    try:
        company_email_id = send_email(
            company_notification_recipients(),
            f"New Lead: {lead.name} - {project_type}",
            render_to_string(
                "leads/emails/company_notification.html",
                {**context, "timestamp": timezone.now()},
            ),
            from_email=settings.EMAIL_FROM_LEADS,
            reply_to=settings.EMAIL_REPLY_TO,
        )
    except EmailDeliveryError as e:
        logger.warning(
            "Company notification failed for lead %s: %s",
            lead.pk,
            str(e),
        )

    return {"customer_email_id": customer_email_id, "company_email_id": company_email_id}


def send_business_plan_resume_email(
    *,
    email: str,
    name: str,
    resume_url: str,
    facility_name: str,
    current_step: int,
    total_steps: int,
    step_label: str,
    expires_at,
) -> str:
    """Email a link that reopens a saved business-plan draft."""
    html = render_to_string(
        "leads/emails/resume_business_plan.html",
        {
            "customer_name": name or "there",
            "resume_url": resume_url,
            "facility_name": facility_name,
            "current_step": current_step,
            "total_steps": total_steps,
            "step_label": step_label,
            "progress_percent": round(current_step / total_steps * 100),
            "expires_at": expires_at,
        },
    )
    return send_email(
        email,
        "Continue Your Sports Facility Business Plan",
        html,
        from_email=settings.EMAIL_FROM_CUSTOMER,
        reply_to=settings.EMAIL_REPLY_TO,
    )
