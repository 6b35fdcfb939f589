"""Captured leads and the wizard reports attached to them."""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models
from django.urls import reverse

from facility_planner.apps.core.models import TimeStampedMixin


class LeadQuerySet(models.QuerySet):
    def unsynced(self):
        """Leads that have not reached the Google Sheet yet."""
        return self.filter(synced_to_google_sheets=False)

    def with_sync_errors(self):
        return self.unsynced().exclude(sync_error="")


class Lead(TimeStampedMixin):
    """A contact captured by one of the site's forms or wizards."""

    B2B_SOURCE = "b2b-contact"

    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, db_index=True)
    phone = models.CharField(max_length=20, blank=True)
    business_name = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=50, blank=True)
    message = models.TextField(max_length=1000, blank=True)
    partnership_type = models.CharField(max_length=100, blank=True)
    allow_outreach = models.BooleanField(default=False)

    facility_type = models.CharField(max_length=100, blank=True)
    facility_size = models.CharField(max_length=100, blank=True)
    sports = models.CharField(max_length=255, blank=True)
    estimated_square_footage = models.PositiveIntegerField(null=True, blank=True)
    estimated_budget = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    estimated_monthly_revenue = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    estimated_roi = models.FloatField(null=True, blank=True)
    break_even_months = models.FloatField(null=True, blank=True)

    source = models.CharField(max_length=50, db_index=True)
    user_agent = models.CharField(max_length=500, blank=True)
    referrer = models.CharField(max_length=500, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)

    synced_to_google_sheets = models.BooleanField(default=False)
    sync_error = models.TextField(blank=True)
    sync_attempted_at = models.DateTimeField(null=True, blank=True)

    objects = LeadQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="lead_created_at_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @property
    def is_b2b(self) -> bool:
        return self.source == self.B2B_SOURCE

    @property
    def location_display(self) -> str:
        return ", ".join(part for part in (self.city, self.state) if part)

    @property
    def report_url(self) -> str:
        """Public link to the newest wizard report for this lead, or ''."""
        submission = self.wizard_submissions.order_by("-created_at").first()
        return submission.get_absolute_url() if submission else ""


class WizardSubmission(TimeStampedMixin):
    """Full snapshot of a facility wizard report, linked from the lead sheet."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    lead = models.ForeignKey(
        Lead,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="wizard_submissions",
    )
    facility_type = models.CharField(max_length=100, blank=True)
    facility_size = models.CharField(max_length=100, blank=True)
    selected_sports = models.JSONField(default=list, blank=True)
    total_square_footage = models.PositiveIntegerField(null=True, blank=True)
    total_investment = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    monthly_revenue = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    monthly_opex = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    break_even_months = models.FloatField(null=True, blank=True)
    roi_percentage = models.FloatField(null=True, blank=True)
    wizard_responses = models.JSONField(default=dict, blank=True)
    recommendations = models.JSONField(default=dict, blank=True)
    financial_metrics = models.JSONField(default=dict, blank=True)
    business_model = models.CharField(max_length=100, blank=True)
    location_type = models.CharField(max_length=100, blank=True)
    timeline = models.CharField(max_length=100, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Wizard report {self.pk}"

    def get_absolute_url(self) -> str:
        return settings.SITE_URL.rstrip("/") + reverse("wizard-submission-detail", args=[self.pk])
