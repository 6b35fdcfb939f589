"""Business plan draft emails using Django Q."""

from __future__ import annotations

import logging

from django_q.tasks import async_task

from facility_planner.logging import current_log_context, log_context

logger = logging.getLogger(__name__)


def enqueue_resume_email(draft_id: int) -> None:
    async_task(
        "facility_planner.apps.wizards.tasks.send_resume_email",
        draft_id,
        current_log_context(),
        timeout=60,
    )


def send_resume_email(draft_id: int, context: dict | None = None) -> dict:
    """Email the resume link for a saved draft.

    This runs asynchronously via Django Q. A failed send is logged; the draft
    itself is already saved.
    """
    from facility_planner.apps.leads.emails import (
        EmailDeliveryError,
        send_business_plan_resume_email,
    )
    from facility_planner.apps.wizards.drafts import TOTAL_STEPS, resume_url, step_label
    from facility_planner.apps.wizards.models import BusinessPlanDraft

    with log_context(context, task="send_resume_email", draft_id=draft_id):
        draft = BusinessPlanDraft.objects.filter(pk=draft_id).first()
        if draft is None:
            return {"status": "error", "error": f"Draft {draft_id} not found"}

        try:
            message_id = send_business_plan_resume_email(
                email=draft.email,
                name=draft.name,
                resume_url=resume_url(draft.resume_token),
                facility_name=draft.facility_name,
                current_step=draft.current_step + 1,
                total_steps=TOTAL_STEPS,
                step_label=step_label(draft.current_step),
                expires_at=draft.expires_at,
            )
        except EmailDeliveryError as e:
            logger.warning("Resume email failed for draft %s: %s", draft_id, str(e))
            return {"status": "error", "error": str(e)}
        return {"status": "success", "message_id": message_id}
