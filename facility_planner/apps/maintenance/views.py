"""JSON endpoints for the maintenance plan builder."""

from __future__ import annotations

from django.http import JsonResponse

from facility_planner.apps.core.http import JsonApiView, form_error_response, json_error
from facility_planner.apps.core.ip import get_real_ip
from facility_planner.apps.leads.services import (
    LeadValidationError,
    RateLimitExceeded,
    submit_lead,
)
from facility_planner.apps.maintenance.catalog import (
    ASSET_CLASS_LABELS,
    MAINTENANCE_ASSETS,
    TAXONOMY_VERSION,
    assets_for_sports,
)
from facility_planner.apps.maintenance.engine import generate_maintenance_plan
from facility_planner.apps.maintenance.forms import (
    PlanContactForm,
    ReminderPreferencesForm,
    parse_selections,
)
from facility_planner.apps.maintenance.reminders import save_plan_with_reminders
from facility_planner.apps.maintenance.tasks import enqueue_plan_email

MAINTENANCE_LEAD_SOURCE = "maintenance-plan"


def _selection_error(errors: dict) -> JsonResponse:
    return json_error("Invalid asset selections", status=400, details=errors)


class AssetCatalogView(JsonApiView):
    """The asset taxonomy, optionally narrowed with `?sports=a,b`."""

    def get(self, request):
        sports = [s for s in request.GET.get("sports", "").split(",") if s]
        assets = assets_for_sports(sports) if sports else MAINTENANCE_ASSETS
        return JsonResponse(
            {
                "version": TAXONOMY_VERSION,
                "asset_classes": ASSET_CLASS_LABELS,
                "assets": [asset.to_dict() for asset in assets],
            }
        )


class GeneratePlanView(JsonApiView):
    def post(self, request):
        selections, errors = parse_selections(self.payload.get("selections", []))
        if errors:
            return _selection_error(errors)
        plan = generate_maintenance_plan(selections)
        return JsonResponse(plan.to_dict())


class SavePlanView(JsonApiView):
    """Regenerate the plan server-side, store it, and schedule reminders."""

    def post(self, request):
        contact = PlanContactForm(data=self.payload)
        if not contact.is_valid():
            return form_error_response(contact)

        raw_preferences = self.payload.get("reminder_preferences") or {}
        if not isinstance(raw_preferences, dict):
            return json_error(
                "Invalid submission",
                details={"reminder_preferences": ["Must be an object."]},
            )
        prefs_form = ReminderPreferencesForm(data=raw_preferences)
        if not prefs_form.is_valid():
            return form_error_response(prefs_form, "Invalid reminder preferences")

        raw_selections = self.payload.get("selections", [])
        selections, errors = parse_selections(raw_selections)
        if errors:
            return _selection_error(errors)

        plan = generate_maintenance_plan(selections)
        saved, reminders = save_plan_with_reminders(
            **contact.cleaned_data,
            plan_data=plan.to_dict(),
            preferences=prefs_form.to_preferences(),
            selected_assets=raw_selections,
        )
        return JsonResponse(
            {
                "success": True,
                "plan_id": saved.pk,
                "reminders": [
                    {"cadence": r.cadence, "next_send_at": r.next_send_at.isoformat()}
                    for r in reminders
                ],
                "plan": saved.plan_data,
            },
            status=201,
        )


class EmailPlanView(JsonApiView):
    """Capture the requester as a lead and email them their plan."""

    def post(self, request):
        selections, errors = parse_selections(self.payload.get("selections", []))
        if errors:
            return _selection_error(errors)

        facility_name = str(self.payload.get("facility_name") or "")[:200]
        try:
            submission = submit_lead(
                {**self.payload, "business_name": self.payload.get("business_name") or facility_name},
                source=MAINTENANCE_LEAD_SOURCE,
                ip_address=get_real_ip(request),
                user_agent=request.headers.get("User-Agent", ""),
                referrer=request.headers.get("Referer", ""),
            )
        except RateLimitExceeded as e:
            reset_time = e.result.reset_time
            return json_error(
                "Too many submissions. Please try again later.",
                status=429,
                reset_time=reset_time.isoformat() if reset_time else None,
            )
        except LeadValidationError as e:
            return form_error_response(e.form, str(e))

        lead = submission.lead
        plan = generate_maintenance_plan(selections)
        enqueue_plan_email(lead.email, plan.to_dict(), lead.name, facility_name)
        return JsonResponse(
            {"success": True, "lead_id": lead.pk, "total_tasks": plan.total_tasks},
            status=202,
        )
