"""JSON endpoints for lead capture."""

from __future__ import annotations

from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from facility_planner.apps.core.http import JsonApiView, form_error_response, json_error
from facility_planner.apps.core.ip import get_real_ip
from facility_planner.apps.core.mixins import StaffRequiredJsonMixin
from facility_planner.apps.leads.models import WizardSubmission
from facility_planner.apps.leads.services import (
    LeadValidationError,
    RateLimitExceeded,
    submit_lead,
)
from facility_planner.apps.leads.tasks import retry_lead_sync


def _optional_dict(payload: dict, key: str) -> dict | None:
    value = payload.get(key)
    return value if isinstance(value, dict) else None


class LeadSubmitView(JsonApiView):
    """Capture a lead from any site form or wizard."""

    def post(self, request):
        payload = self.payload
        try:
            submission = submit_lead(
                payload,
                source=payload.get("source"),
                ip_address=get_real_ip(request),
                user_agent=request.headers.get("User-Agent", ""),
                referrer=payload.get("referrer") or request.headers.get("Referer", ""),
                facility_details=_optional_dict(payload, "facility_details"),
                estimates=_optional_dict(payload, "estimates"),
                report=_optional_dict(payload, "report"),
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

        report = submission.wizard_submission
        return JsonResponse(
            {
                "success": True,
                "lead_id": submission.lead.pk,
                "report_id": str(report.pk) if report else None,
                "report_url": report.get_absolute_url() if report else None,
            },
            status=201,
        )


class RetryLeadSyncView(StaffRequiredJsonMixin, JsonApiView):
    """Staff-only: push a lead to the Google Sheet again."""

    def post(self, request, pk):
        result = retry_lead_sync(pk)
        if result["status"] == "success":
            return JsonResponse({"success": True, "message": result["message"]})
        status = 404 if result["error"] == "Lead not found" else 502
        return json_error(result["error"], status=status, success=False)


class WizardSubmissionDetailView(JsonApiView):
    """Public report snapshot, addressed by its unguessable id."""

    def get(self, request, pk):
        submission = get_object_or_404(WizardSubmission, pk=pk)
        return JsonResponse(
            {
                "id": str(submission.pk),
                "created_at": submission.created_at.isoformat(),
                "facility_type": submission.facility_type,
                "facility_size": submission.facility_size,
                "selected_sports": submission.selected_sports,
                "total_square_footage": submission.total_square_footage,
                "total_investment": submission.total_investment,
                "monthly_revenue": submission.monthly_revenue,
                "monthly_opex": submission.monthly_opex,
                "break_even_months": submission.break_even_months,
                "roi_percentage": submission.roi_percentage,
                "wizard_responses": submission.wizard_responses,
                "recommendations": submission.recommendations,
                "financial_metrics": submission.financial_metrics,
                "business_model": submission.business_model,
                "location_type": submission.location_type,
                "timeline": submission.timeline,
            }
        )
