"""Admin interface for leads and wizard reports."""

from django.contrib import admin, messages
from django.http import HttpResponseRedirect
from django.urls import path, reverse

from .models import Lead, WizardSubmission
from .tasks import retry_lead_sync
from .webhooks import send_test_webhook


class WizardSubmissionInline(admin.TabularInline):
    model = WizardSubmission
    extra = 0
    fields = ("id", "facility_type", "total_investment", "roi_percentage", "created_at")
    readonly_fields = fields
    can_delete = False
    show_change_link = True


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "email",
        "source",
        "facility_type",
        "synced_to_google_sheets",
        "created_at",
    )
    list_filter = ("source", "synced_to_google_sheets", "allow_outreach")
    search_fields = ("name", "email", "business_name", "city")
    readonly_fields = (
        "ip_address",
        "user_agent",
        "referrer",
        "synced_to_google_sheets",
        "sync_error",
        "sync_attempted_at",
        "created_at",
        "updated_at",
    )
    inlines = (WizardSubmissionInline,)
    actions = ("retry_google_sheets_sync",)
    change_list_template = "admin/leads/lead/change_list.html"
    fieldsets = (
        (
            None,
            {
                "fields": (
                    "name",
                    "email",
                    "phone",
                    "business_name",
                    ("city", "state"),
                    "source",
                    "allow_outreach",
                    "partnership_type",
                    "message",
                )
            },
        ),
        (
            "Facility & Estimates",
            {
                "fields": (
                    "facility_type",
                    "facility_size",
                    "sports",
                    "estimated_square_footage",
                    "estimated_budget",
                    "estimated_monthly_revenue",
                    "estimated_roi",
                    "break_even_months",
                )
            },
        ),
        (
            "Google Sheets Sync",
            {"fields": ("synced_to_google_sheets", "sync_error", "sync_attempted_at")},
        ),
        (
            "Request",
            {
                "fields": ("ip_address", "user_agent", "referrer", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.action(description="Retry Google Sheets sync")
    def retry_google_sheets_sync(self, request, queryset):
        synced = 0
        for lead in queryset:
            result = retry_lead_sync(lead.pk)
            if result["status"] == "success":
                synced += 1
            else:
                messages.error(request, f"{lead.email}: {result.get('error', 'Unknown error')}")
        if synced:
            messages.success(request, f"Synced {synced} lead(s) to Google Sheets")

    def get_urls(self):
        urls = super().get_urls()
        custom_urls = [
            path(
                "test-webhook/",
                self.admin_site.admin_view(self.test_webhook_view),
                name="leads_lead_test_webhook",
            ),
        ]
        return custom_urls + urls

    def test_webhook_view(self, request):
        """Send sample lead data to the Make.com webhook."""
        result = send_test_webhook()
        if result["status"] == "success":
            messages.success(request, result["message"])
        else:
            messages.error(request, f"Test failed: {result.get('error', 'Unknown error')}")
        return HttpResponseRedirect(reverse("admin:leads_lead_changelist"))


@admin.register(WizardSubmission)
class WizardSubmissionAdmin(admin.ModelAdmin):
    list_display = ("id", "lead", "facility_type", "total_investment", "created_at")
    search_fields = ("lead__email", "lead__name")
    readonly_fields = ("id", "created_at", "updated_at")
    raw_id_fields = ("lead",)
