"""Vendor product mappings used for live equipment pricing."""

from __future__ import annotations

from django.db import models
from simple_history.models import HistoricalRecords

from facility_planner.apps.core.models import TimeStampedMixin


class SyncStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    SUCCESS = "success", "Success"
    NO_PRICE_FOUND = "no_price_found", "No price found"
    ERROR = "error", "Error"


class ProductPricingQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class ProductPricing(TimeStampedMixin):
    """A cost library item mapped to a vendor product page.

    The scraped price replaces the static cost library figure only while the
    last sync succeeded. Fallback overrides let staff pin a tier price by hand.
    """

    cost_library_id = models.CharField(max_length=100, unique=True)
    product_name = models.CharField(max_length=200)
    vendor = models.CharField(max_length=100, blank=True)
    product_url = models.URLField(max_length=500, blank=True)
    scraped_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    sync_status = models.CharField(
        max_length=20,
        choices=SyncStatus.choices,
        default=SyncStatus.PENDING,
    )
    sync_error = models.TextField(blank=True)
    last_synced_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    fallback_override_low = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    fallback_override_mid = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    fallback_override_high = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )

    history = HistoricalRecords()

    objects = ProductPricingQuerySet.as_manager()

    class Meta:
        ordering = ["cost_library_id"]
        verbose_name = "product pricing"
        verbose_name_plural = "product pricing"

    def __str__(self) -> str:
        return f"{self.cost_library_id}: {self.product_name}"

    def fallback_override(self, tier: str):
        """Staff-entered price for `tier`, or None."""
        return getattr(self, f"fallback_override_{tier}")
