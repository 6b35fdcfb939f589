"""JSON endpoints for wizard project state and business plan drafts."""

from __future__ import annotations

from django.http import JsonResponse

from facility_planner.apps.core.http import JsonApiView, form_error_response, json_error
from facility_planner.apps.wizards.drafts import get_resumable_draft, resume_url, save_draft
from facility_planner.apps.wizards.forms import BusinessPlanDraftForm, NewProjectForm
from facility_planner.apps.wizards.models import ProjectMode
from facility_planner.apps.wizards.projects import (
    generate_project_id,
    get_project_state,
    has_lead_data,
    is_valid_project_id,
    save_project_state,
    upgrade_to_pro_mode,
)
from facility_planner.apps.wizards.tasks import enqueue_resume_email


def _invalid_project_id():
    return json_error("Invalid project id")


class ProjectCreateView(JsonApiView):
    def post(self, request):
        form = NewProjectForm(data=self.payload)
        if not form.is_valid():
            return form_error_response(form)
        mode = form.cleaned_data.get("mode") or ProjectMode.EASY
        project_id = generate_project_id(mode)
        state = save_project_state(project_id, {"mode": mode})
        return JsonResponse(state, status=201)


class ProjectStateView(JsonApiView):
    """GET reads a project's state; POST merges top-level keys into it."""

    def get(self, request, project_id):
        if not is_valid_project_id(project_id):
            return _invalid_project_id()
        state = get_project_state(project_id)
        return JsonResponse({**state, "has_lead_data": has_lead_data(project_id)})

    def post(self, request, project_id):
        if not is_valid_project_id(project_id):
            return _invalid_project_id()
        return JsonResponse(save_project_state(project_id, self.payload))


class ProjectUpgradeView(JsonApiView):
    def post(self, request, project_id):
        if not is_valid_project_id(project_id):
            return _invalid_project_id()
        return JsonResponse(upgrade_to_pro_mode(project_id))


class BusinessPlanDraftView(JsonApiView):
    """Save a draft and email its resume link, or fetch one by token."""

    def get(self, request):
        token = request.GET.get("token")
        if not token:
            return json_error("Missing resume token")
        draft = get_resumable_draft(token)
        if draft is None:
            return json_error("Draft not found or expired", status=404)
        return JsonResponse(
            {
                "success": True,
                "draft": {
                    "email": draft.email,
                    "name": draft.name,
                    "current_step": draft.current_step,
                    "plan_data": draft.plan_data,
                    "expires_at": draft.expires_at.isoformat(),
                },
            }
        )

    def post(self, request):
        if not self.payload.get("email") or "plan_data" not in self.payload:
            return json_error("Missing required fields")
        form = BusinessPlanDraftForm(data=self.payload)
        if not form.is_valid():
            return form_error_response(form)
        plan_data = self.payload["plan_data"]
        if not isinstance(plan_data, dict):
            return json_error("Invalid submission", details={"plan_data": ["Must be an object."]})

        draft, _ = save_draft(
            email=form.cleaned_data["email"],
            name=form.cleaned_data.get("name", ""),
            current_step=form.cleaned_data.get("current_step") or 0,
            plan_data=plan_data,
        )
        enqueue_resume_email(draft.pk)
        return JsonResponse(
            {
                "success": True,
                "resume_token": draft.resume_token,
                "resume_url": resume_url(draft.resume_token),
                "expires_at": draft.expires_at.isoformat(),
            }
        )
