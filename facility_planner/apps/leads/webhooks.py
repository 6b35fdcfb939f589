"""Make.com webhook relay for new leads.

The destination URL and on/off switch live in constance so staff can change
them from the admin without a deploy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests
from constance import config
from django.utils import timezone

if TYPE_CHECKING:
    from facility_planner.apps.leads.models import Lead

logger = logging.getLogger(__name__)

TEST_LEAD = {
    "first_name": "Test",
    "last_name": "User",
    "email": "test@example.com",
    "phone": "555-0123",
    "city": "Test City",
    "state": "Test State",
    "project_type": "Test Facility",
    "source": "quick-estimate",
}


def lead_payload(lead: Lead) -> dict:
    """JSON body describing `lead` for the webhook."""
    first_name, _, last_name = lead.name.partition(" ")
    return {
        "lead_id": lead.pk,
        "first_name": first_name,
        "last_name": last_name,
        "email": lead.email,
        "phone": lead.phone,
        "city": lead.city,
        "state": lead.state,
        "project_type": lead.facility_type,
        "facility_size": lead.facility_size,
        "sports": [s.strip() for s in lead.sports.split(",") if s.strip()],
        "total_investment": float(lead.estimated_budget) if lead.estimated_budget else None,
        "monthly_revenue": (
            float(lead.estimated_monthly_revenue) if lead.estimated_monthly_revenue else None
        ),
        "roi": lead.estimated_roi,
        "source": lead.source,
        "user_agent": lead.user_agent,
        "referrer": lead.referrer or "Direct",
        "report_url": lead.report_url,
    }


def dispatch_lead(payload: dict) -> bool:
    """POST `payload` to the Make.com webhook.

    Returns False when the webhook is disabled, unconfigured, or fails.
    """
    if not config.MAKE_WEBHOOK_ENABLED or not config.MAKE_WEBHOOK_URL:
        logger.debug("Make.com webhook not configured or disabled")
        return False

    try:
        response = requests.post(
            config.MAKE_WEBHOOK_URL,
            json={**payload, "timestamp": timezone.now().isoformat()},
            timeout=10,
            headers={"Content-Type": "application/json"},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Make.com webhook delivery failed: %s", str(e))
        return False
    return True


def send_test_webhook() -> dict:
    """Send sample lead data to the configured webhook.

    This is called directly (not via async_task) from the admin UI
    so the user gets immediate feedback.
    """
    if not config.MAKE_WEBHOOK_ENABLED or not config.MAKE_WEBHOOK_URL:
        return {"status": "error", "error": "Make.com webhook is disabled or has no URL"}
    if dispatch_lead(TEST_LEAD):
        return {"status": "success", "message": "Test lead sent to Make.com"}
    return {"status": "error", "error": "Webhook request failed; see logs for details"}
