"""Saving and resuming business plan drafts."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from facility_planner.apps.wizards.models import BusinessPlanDraft

logger = logging.getLogger(__name__)

DRAFT_LIFETIME = timedelta(days=30)

STEP_LABELS = (
    "Project Overview",
    "Market & Demographics",
    "Sport Selection",
    "Competitive Analysis",
    "Facility Design",
    "Programming & Operations",
    "Financial Inputs",
    "Risk Assessment",
    "Timeline",
    "Review & Generate",
)
TOTAL_STEPS = len(STEP_LABELS)


def step_label(step: int) -> str:
    """Label for a zero-based step index."""
    if 0 <= step < TOTAL_STEPS:
        return STEP_LABELS[step]
    return f"Step {step + 1}"


def resume_url(token: str) -> str:
    return f"{settings.SITE_URL}/business-plan?resume={token}"


def new_resume_token() -> str:
    return uuid.uuid4().hex


@transaction.atomic
def save_draft(
    *,
    email: str,
    plan_data: dict,
    name: str = "",
    current_step: int = 0,
    now: datetime | None = None,
) -> tuple[BusinessPlanDraft, bool]:
    """Create or refresh the unexpired draft for `email`.

    An existing draft keeps its resume token so links already emailed still
    work. Either way the expiry moves to 30 days from now.
    """
    now = now or timezone.now()
    expires_at = now + DRAFT_LIFETIME
    draft = (
        BusinessPlanDraft.objects.select_for_update()
        .unexpired(now)
        .filter(email=email)
        .order_by("-updated_at")
        .first()
    )
    created = draft is None
    if created:
        draft = BusinessPlanDraft(email=email, resume_token=new_resume_token())

    draft.name = name
    draft.current_step = current_step
    draft.plan_data = plan_data
    draft.expires_at = expires_at
    draft.save()

    logger.info(
        "Business plan draft saved",
        extra={"draft_id": draft.pk, "created": created, "current_step": current_step},
    )
    return draft, created


def get_resumable_draft(token: str, now: datetime | None = None) -> BusinessPlanDraft | None:
    return BusinessPlanDraft.objects.unexpired(now).filter(resume_token=token).first()
