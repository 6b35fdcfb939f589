"""Server-side wizard progress: calculator projects and business plan drafts."""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from facility_planner.apps.core.models import TimeStampedMixin


class ProjectMode(models.TextChoices):
    EASY = "easy", "Easy"
    PRO = "pro", "Pro"
    QUICK = "quick", "Quick estimate"


class ProjectState(TimeStampedMixin):
    """Calculator wizard state, stored as one JSON document per project.

    `mode` mirrors `data["mode"]` so the admin can filter on it.
    """

    project_id = models.CharField(max_length=50, unique=True)
    mode = models.CharField(max_length=10, choices=ProjectMode.choices, default=ProjectMode.EASY)
    data = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return self.project_id


class BusinessPlanDraftQuerySet(models.QuerySet):
    def unexpired(self, now=None):
        return self.filter(expires_at__gt=now or timezone.now())


class BusinessPlanDraft(TimeStampedMixin):
    """A partially completed business plan that can be resumed by token."""

    resume_token = models.CharField(max_length=32, unique=True)
    email = models.EmailField(max_length=255, db_index=True)
    name = models.CharField(max_length=100, blank=True)
    current_step = models.PositiveSmallIntegerField(default=0)
    plan_data = models.JSONField(default=dict, blank=True)
    expires_at = models.DateTimeField(db_index=True)

    objects = BusinessPlanDraftQuerySet.as_manager()

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"Business plan draft for {self.email}"

    @property
    def facility_name(self) -> str:
        overview = (self.plan_data or {}).get("projectOverview") or {}
        return overview.get("facilityName") or "Untitled"

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= timezone.now()
