"""Saved maintenance plans and their email reminders."""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from facility_planner.apps.core.models import TimeStampedMixin


class Cadence(models.TextChoices):
    """Maintenance periods, most frequent first."""

    DAILY = "daily", "Daily"
    WEEKLY = "weekly", "Weekly"
    MONTHLY = "monthly", "Monthly"
    QUARTERLY = "quarterly", "Quarterly"
    ANNUAL = "annual", "Annual"


class SavedMaintenancePlan(TimeStampedMixin):
    """A generated plan stored for a facility contact, one per email address."""

    email = models.EmailField(max_length=255, unique=True)
    name = models.CharField(max_length=100, blank=True)
    facility_name = models.CharField(max_length=200, blank=True)
    location_city = models.CharField(max_length=100, blank=True)
    location_state = models.CharField(max_length=50, blank=True)
    location_zip = models.CharField(max_length=10, blank=True)
    sports = models.JSONField(default=list, blank=True)
    selected_assets = models.JSONField(default=list, blank=True)
    plan_data = models.JSONField(default=dict, blank=True)
    plan_version = models.CharField(max_length=20, blank=True)
    reminder_preferences = models.JSONField(default=dict, blank=True)
    reminders_active = models.BooleanField(default=False)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"{self.facility_name or 'Your Facility'} ({self.email})"

    def tasks_for(self, cadence: str) -> list[dict]:
        """Scheduled tasks stored for one cadence bucket."""
        return list((self.plan_data.get("tasks") or {}).get(cadence) or [])


class MaintenanceReminderQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def due(self, now=None):
        """Active reminders whose next send time has passed."""
        return self.active().filter(next_send_at__lte=now or timezone.now())


class MaintenanceReminder(TimeStampedMixin):
    """Recurring email reminding recipients of one cadence's tasks."""

    plan = models.ForeignKey(
        SavedMaintenancePlan,
        on_delete=models.CASCADE,
        related_name="reminders",
    )
    cadence = models.CharField(max_length=20, choices=Cadence.choices)
    recipients = models.JSONField(default=list)
    next_send_at = models.DateTimeField(db_index=True)
    last_sent_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    objects = MaintenanceReminderQuerySet.as_manager()

    class Meta:
        ordering = ["next_send_at"]

    def __str__(self) -> str:
        return f"{self.get_cadence_display()} reminder for {self.plan.email}"
