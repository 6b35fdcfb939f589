"""Lead submission: rate limit, validate, persist, then queue follow-up."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction
from django.forms import Form

from facility_planner.apps.leads.forms import LeadForm, WizardReportForm, sanitize_lead_data
from facility_planner.apps.leads.models import Lead, WizardSubmission
from facility_planner.apps.leads.rate_limit import (
    RateLimitResult,
    check_rate_limit,
    record_submission,
)
from facility_planner.apps.leads.tasks import enqueue_lead_follow_up

logger = logging.getLogger(__name__)

LEAD_FIELDS = (
    "name",
    "email",
    "phone",
    "business_name",
    "city",
    "state",
    "message",
    "partnership_type",
    "allow_outreach",
    "facility_type",
    "facility_size",
    "sports",
    "estimated_square_footage",
    "estimated_budget",
    "estimated_monthly_revenue",
    "estimated_roi",
    "break_even_months",
)


class RateLimitExceeded(Exception):
    def __init__(self, result: RateLimitResult):
        super().__init__("Too many submissions")
        self.result = result


class LeadValidationError(Exception):
    def __init__(self, form: Form, message: str = "Invalid lead data"):
        super().__init__(message)
        self.form = form


@dataclass
class LeadSubmission:
    lead: Lead
    wizard_submission: WizardSubmission | None = None


def _create_wizard_submission(lead: Lead, report: dict) -> WizardSubmission:
    return WizardSubmission.objects.create(
        lead=lead,
        facility_type=lead.facility_type,
        facility_size=lead.facility_size,
        selected_sports=report.get("selected_sports") or [s for s in [lead.sports] if s],
        total_square_footage=lead.estimated_square_footage,
        total_investment=lead.estimated_budget,
        monthly_revenue=lead.estimated_monthly_revenue,
        monthly_opex=report.get("monthly_opex"),
        break_even_months=lead.break_even_months,
        roi_percentage=lead.estimated_roi,
        wizard_responses=report.get("wizard_responses") or {},
        recommendations=report.get("recommendations") or {},
        financial_metrics=report.get("financial_metrics") or {},
        business_model=report.get("business_model") or "",
        location_type=report.get("location_type") or "",
        timeline=report.get("timeline") or "",
    )


def submit_lead(
    data: dict,
    *,
    source: str | None = None,
    ip_address: str | None = None,
    user_agent: str = "",
    referrer: str = "",
    facility_details: dict | None = None,
    estimates: dict | None = None,
    report: dict | None = None,
) -> LeadSubmission:
    """Capture a lead from form data.

    Raises RateLimitExceeded or LeadValidationError before anything is saved.
    Follow-up work (emails, sheet row, webhook) is queued and never fails the
    submission.
    """
    limit = check_rate_limit(ip_address)
    if not limit.allowed:
        logger.info("Lead submission rate limited", extra={"remote_ip": ip_address})
        raise RateLimitExceeded(limit)

    form = LeadForm(data=data)
    if not form.is_valid():
        raise LeadValidationError(form)
    cleaned = sanitize_lead_data(form.cleaned_data)

    if report:
        report_form = WizardReportForm(data=report)
        if not report_form.is_valid():
            raise LeadValidationError(report_form, "Invalid report data")
        report = report_form.cleaned_data

    with transaction.atomic():
        lead = Lead.objects.create(
            **{field: cleaned[field] for field in LEAD_FIELDS if cleaned.get(field) is not None},
            source=source or cleaned.get("source") or "website",
            ip_address=ip_address,
            user_agent=user_agent[:500],
            referrer=referrer[:500],
        )
        submission = _create_wizard_submission(lead, report) if report else None

    record_submission(ip_address)
    logger.info("Lead captured", extra={"lead_id": lead.pk, "source": lead.source})

    enqueue_lead_follow_up(lead.pk, facility_details, estimates)
    return LeadSubmission(lead=lead, wizard_submission=submission)
