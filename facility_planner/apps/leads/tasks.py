"""Lead follow-up tasks using Django Q."""

from __future__ import annotations

import logging

from django_q.tasks import async_task

from facility_planner.logging import current_log_context, log_context

logger = logging.getLogger(__name__)


def enqueue_lead_follow_up(
    lead_id: int,
    facility_details: dict | None = None,
    estimates: dict | None = None,
) -> None:
    """Queue confirmation emails, the sheet row and the webhook for a new lead."""
    async_task(
        "facility_planner.apps.leads.tasks.process_new_lead",
        lead_id,
        facility_details,
        estimates,
        current_log_context(),
        timeout=60,
    )


def process_new_lead(
    lead_id: int,
    facility_details: dict | None = None,
    estimates: dict | None = None,
    context: dict | None = None,
) -> dict:
    """Run each follow-up step; one failing step does not stop the others.

    This runs asynchronously via Django Q.
    """
    from facility_planner.apps.leads.emails import EmailDeliveryError, send_lead_emails
    from facility_planner.apps.leads.models import Lead
    from facility_planner.apps.leads.sheets import sync_lead_to_sheets
    from facility_planner.apps.leads.webhooks import dispatch_lead, lead_payload

    with log_context(context, task="process_new_lead", lead_id=lead_id):
        lead = Lead.objects.filter(pk=lead_id).first()
        if lead is None:
            return {"status": "error", "reason": f"Lead {lead_id} not found"}

        results: dict[str, str] = {}
        try:
            send_lead_emails(lead, facility_details, estimates)
            results["emails"] = "success"
        except EmailDeliveryError as e:
            logger.warning("Lead confirmation email failed for lead %s: %s", lead_id, str(e))
            results["emails"] = "error"

        results["sheets"] = "success" if sync_lead_to_sheets(lead) else "not_synced"
        results["webhook"] = "success" if dispatch_lead(lead_payload(lead)) else "not_sent"
        return {"status": "completed", "results": results}


def retry_lead_sync(lead_id: int) -> dict:
    """Reset a lead's sheet sync state and try again.

    Called directly from the staff endpoint and admin action so the caller
    sees the outcome.
    """
    from facility_planner.apps.leads.models import Lead
    from facility_planner.apps.leads.sheets import reset_sync_state, sync_lead_to_sheets

    lead = Lead.objects.filter(pk=lead_id).first()
    if lead is None:
        return {"status": "error", "error": "Lead not found"}

    reset_sync_state(lead)
    if sync_lead_to_sheets(lead):
        return {"status": "success", "message": "Lead synced successfully to Google Sheets"}
    return {"status": "error", "error": lead.sync_error or "Google Sheets sync is disabled"}
