"""Health check helpers."""

from __future__ import annotations

from django.db import connection

from facility_planner.apps.leads.models import Lead


def check_db_and_orm() -> dict:
    """Verify DB connectivity and ORM access by touching the leads table."""
    details: dict[str, object] = {}
    connection.ensure_connection()
    details["db"] = "ok"

    latest_lead = Lead.objects.order_by("-id").values_list("id", flat=True).first()
    details["orm_lead_sample"] = latest_lead if latest_lead is not None else "none"
    return details
