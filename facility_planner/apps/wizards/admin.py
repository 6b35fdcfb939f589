"""Admin interface for wizard progress."""

from django.contrib import admin

from .models import BusinessPlanDraft, ProjectState


@admin.register(ProjectState)
class ProjectStateAdmin(admin.ModelAdmin):
    list_display = ("project_id", "mode", "created_at", "updated_at")
    list_filter = ("mode",)
    search_fields = ("project_id",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(BusinessPlanDraft)
class BusinessPlanDraftAdmin(admin.ModelAdmin):
    list_display = ("email", "name", "current_step", "expires_at", "updated_at")
    search_fields = ("email", "name")
    readonly_fields = ("resume_token", "created_at", "updated_at")
