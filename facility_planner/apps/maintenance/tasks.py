"""Background maintenance jobs run by Django Q."""

from __future__ import annotations

import logging

from django.conf import settings
from django.template.loader import render_to_string
from django_q.tasks import async_task

from facility_planner.apps.leads.emails import EmailDeliveryError, send_email
from facility_planner.apps.maintenance.engine import CADENCE_ORDER
from facility_planner.apps.maintenance.reminders import send_due_reminders
from facility_planner.logging import current_log_context, log_context

logger = logging.getLogger(__name__)


def enqueue_plan_email(email: str, plan: dict, name: str = "", facility_name: str = "") -> None:
    """Queue delivery of a generated plan to `email`."""
    async_task(
        "facility_planner.apps.maintenance.tasks.send_plan_email",
        email,
        plan,
        name,
        facility_name,
        current_log_context(),
        timeout=60,
    )


def send_plan_email(
    email: str,
    plan: dict,
    name: str = "",
    facility_name: str = "",
    context: dict | None = None,
) -> dict:
    """Render and send a maintenance plan.

    This runs asynchronously via Django Q.
    """
    with log_context(context, task="send_plan_email"):
        tasks = plan.get("tasks") or {}
        buckets = [
            {"label": cadence.capitalize(), "tasks": tasks.get(cadence) or []}
            for cadence in CADENCE_ORDER
        ]
        html = render_to_string(
            "maintenance/emails/plan.html",
            {
                "name": name,
                "facility_name": facility_name,
                "buckets": buckets,
                "total_tasks": sum(len(bucket["tasks"]) for bucket in buckets),
                "red_flags": plan.get("red_flags") or [],
                "contractor_needs": plan.get("contractor_needs") or [],
                "version": plan.get("version", ""),
            },
        )
        try:
            message_id = send_email(
                email,
                f"Your Maintenance Plan - {facility_name or 'Your Facility'}",
                html,
                from_email=settings.EMAIL_FROM_REMINDERS,
                reply_to=settings.EMAIL_REPLY_TO,
            )
        except EmailDeliveryError as e:
            logger.warning("Maintenance plan email failed: %s", str(e))
            return {"status": "error", "error": str(e)}
        return {"status": "success", "message_id": message_id}


def send_maintenance_reminders() -> dict:
    """Scheduled entry point for reminder delivery."""
    with log_context(None, task="send_maintenance_reminders"):
        return {"sent": send_due_reminders()}
