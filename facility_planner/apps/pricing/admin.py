"""Admin interface for product pricing."""

from django.contrib import admin, messages
from simple_history.admin import SimpleHistoryAdmin

from .models import ProductPricing
from .services import invalidate_price_cache
from .tasks import enqueue_price_sync


@admin.register(ProductPricing)
class ProductPricingAdmin(SimpleHistoryAdmin):
    list_display = (
        "cost_library_id",
        "product_name",
        "vendor",
        "scraped_price",
        "sync_status",
        "last_synced_at",
        "is_active",
    )
    list_filter = ("sync_status", "is_active", "vendor")
    search_fields = ("cost_library_id", "product_name", "vendor")
    list_editable = ("is_active",)
    readonly_fields = ("scraped_price", "sync_status", "sync_error", "last_synced_at")
    actions = ("sync_selected_prices",)
    fieldsets = (
        (None, {"fields": ("cost_library_id", "product_name", "vendor", "product_url", "is_active")}),
        (
            "Fallback Overrides",
            {
                "fields": (
                    "fallback_override_low",
                    "fallback_override_mid",
                    "fallback_override_high",
                )
            },
        ),
        ("Last Sync", {"fields": readonly_fields}),
    )

    @admin.action(description="Sync prices from vendor pages")
    def sync_selected_prices(self, request, queryset):
        count = 0
        for product in queryset.filter(is_active=True):
            enqueue_price_sync(product.cost_library_id)
            count += 1
        if count:
            messages.success(request, f"Queued price sync for {count} product(s)")
        else:
            messages.warning(request, "No active products selected")

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        invalidate_price_cache()
