"""Calculator project state.

A project's state is a flat JSON document. Saves merge the incoming keys over
the stored document one level deep, so a step only needs to send the
sections it changed.
"""

from __future__ import annotations

import re
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from facility_planner.apps.wizards.models import ProjectMode, ProjectState

PROJECT_ID_RE = re.compile(r"^(easy|pro|quick)-\d{1,20}$")

# Keys owned by the server; client updates cannot overwrite them
RESERVED_KEYS = ("id", "created_at", "updated_at")


def generate_project_id(mode: str = ProjectMode.EASY, now: datetime | None = None) -> str:
    """`<mode>-<epoch millis>`."""
    now = now or timezone.now()
    return f"{mode}-{int(now.timestamp() * 1000)}"


def is_valid_project_id(project_id: str) -> bool:
    return bool(PROJECT_ID_RE.match(project_id))


def default_state(project_id: str) -> dict:
    now = timezone.now().isoformat()
    return {"id": project_id, "mode": ProjectMode.EASY, "created_at": now, "updated_at": now}


def get_project_state(project_id: str) -> dict:
    """Stored state, or a fresh default for ids that were never saved."""
    project = ProjectState.objects.filter(project_id=project_id).first()
    if project is None:
        return default_state(project_id)
    return dict(project.data)


@transaction.atomic
def save_project_state(project_id: str, updates: dict) -> dict:
    """Shallow-merge `updates` into the stored state and return the result."""
    project, created = ProjectState.objects.select_for_update().get_or_create(
        project_id=project_id,
        defaults={"data": default_state(project_id)},
    )
    merged = {
        **project.data,
        **{k: v for k, v in updates.items() if k not in RESERVED_KEYS},
        "id": project_id,
        "updated_at": timezone.now().isoformat(),
    }
    if merged.get("mode") not in ProjectMode.values:
        merged["mode"] = project.mode
    project.data = merged
    project.mode = merged["mode"]
    project.save()
    return merged


def upgrade_to_pro_mode(project_id: str) -> dict:
    """Switch a project to pro mode, remembering the mode it came from."""
    current = get_project_state(project_id)
    return save_project_state(
        project_id,
        {
            "mode": ProjectMode.PRO,
            "upgraded_from": current.get("mode", ProjectMode.EASY),
            "upgraded_at": timezone.now().isoformat(),
        },
    )


def has_lead_data(project_id: str) -> bool:
    """True once the project has captured at least a lead name and email."""
    lead = get_project_state(project_id).get("lead") or {}
    return bool(lead.get("name") and lead.get("email"))
