"""Admin interface for saved maintenance plans."""

from django.contrib import admin

from .models import MaintenanceReminder, SavedMaintenancePlan


class MaintenanceReminderInline(admin.TabularInline):
    model = MaintenanceReminder
    extra = 0
    fields = ("cadence", "recipients", "next_send_at", "last_sent_at", "is_active")
    readonly_fields = ("last_sent_at",)


@admin.register(SavedMaintenancePlan)
class SavedMaintenancePlanAdmin(admin.ModelAdmin):
    list_display = ("email", "facility_name", "plan_version", "reminders_active", "updated_at")
    list_filter = ("reminders_active", "plan_version")
    search_fields = ("email", "name", "facility_name")
    readonly_fields = ("created_at", "updated_at")
    inlines = (MaintenanceReminderInline,)
    fieldsets = (
        (None, {"fields": ("email", "name", "facility_name")}),
        ("Location", {"fields": ("location_city", "location_state", "location_zip")}),
        (
            "Plan",
            {
                "fields": (
                    "sports",
                    "selected_assets",
                    "plan_version",
                    "plan_data",
                    "reminder_preferences",
                    "reminders_active",
                ),
            },
        ),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )


@admin.register(MaintenanceReminder)
class MaintenanceReminderAdmin(admin.ModelAdmin):
    list_display = ("plan", "cadence", "next_send_at", "last_sent_at", "is_active")
    list_filter = ("cadence", "is_active")
    search_fields = ("plan__email", "plan__facility_name")
    raw_id_fields = ("plan",)
