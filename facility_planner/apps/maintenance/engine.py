"""Maintenance cadence engine.

Turns a list of asset selections into a maintenance schedule by applying a
small, fixed set of modifier rules to each catalog task:

1. Aging overhead or safety equipment (class A/B, 8+ years) moves quarterly
   tasks to monthly.
2. Heavy usage moves every task one step more frequent.
3. Class A/B equipment older than 13 years gains an annual structural
   inspection unless the catalog already schedules one.

Cadences only ever move toward `daily`. The rules run in the order above and
each applies at most once per task.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from django.utils import timezone

from facility_planner.apps.maintenance.catalog import TAXONOMY_VERSION, get_asset

logger = logging.getLogger(__name__)

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
QUARTERLY = "quarterly"
ANNUAL = "annual"

# Most frequent first
CADENCE_ORDER: tuple[str, ...] = (DAILY, WEEKLY, MONTHLY, QUARTERLY, ANNUAL)

AGE_BUCKETS: tuple[str, ...] = ("0-3", "4-7", "8-12", "13+")
USAGE_INTENSITIES: tuple[str, ...] = ("light", "moderate", "heavy")

AGING_BUCKETS = frozenset({"8-12", "13+"})
CRITICAL_CLASSES = frozenset({"A", "B"})

STRUCTURAL_INSPECTION = "Additional structural inspection required for equipment aged 13+ years"


def cadence_rank(cadence: str) -> int:
    """Position in CADENCE_ORDER; lower is more frequent."""
    return CADENCE_ORDER.index(cadence)


def shift_cadence_up(cadence: str) -> str:
    """Return the next more frequent cadence. `daily` stays `daily`."""
    idx = cadence_rank(cadence)
    return CADENCE_ORDER[idx - 1] if idx > 0 else cadence


@dataclass(frozen=True)
class AssetSelection:
    """One asset the facility owns, with the attributes that drive modifiers."""

    asset_id: str
    quantity: int = 1
    age_bucket: str = "0-3"
    usage_intensity: str = "moderate"
    motorized: bool = False


@dataclass(frozen=True)
class ScheduledTask:
    asset_id: str
    asset_name: str
    asset_class: str
    cadence: str
    description: str
    staff_can_do: bool
    doc_required: bool
    quantity: int
    is_modified: bool

    def to_dict(self) -> dict:
        return {
            "asset_id": self.asset_id,
            "asset_name": self.asset_name,
            "asset_class": self.asset_class,
            "cadence": self.cadence,
            "description": self.description,
            "staff_can_do": self.staff_can_do,
            "doc_required": self.doc_required,
            "quantity": self.quantity,
            "is_modified": self.is_modified,
        }


@dataclass
class MaintenancePlan:
    version: str
    generated_at: str
    tasks: dict[str, list[ScheduledTask]]
    red_flags: list[dict] = field(default_factory=list)
    contractor_needs: list[dict] = field(default_factory=list)

    @property
    def total_tasks(self) -> int:
        return sum(len(bucket) for bucket in self.tasks.values())

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "generated_at": self.generated_at,
            "tasks": {
                cadence: [task.to_dict() for task in self.tasks[cadence]]
                for cadence in CADENCE_ORDER
            },
            "red_flags": [dict(entry, flags=list(entry["flags"])) for entry in self.red_flags],
            "contractor_needs": [
                {"category": need["category"], "tasks": list(need["tasks"])}
                for need in self.contractor_needs
            ],
        }


def _modified_cadence(
    cadence: str, asset_class: str, selection: AssetSelection
) -> tuple[str, bool]:
    modified = False
    if (
        selection.age_bucket in AGING_BUCKETS
        and asset_class in CRITICAL_CLASSES
        and cadence == QUARTERLY
    ):
        cadence = MONTHLY
        modified = True

    if selection.usage_intensity == "heavy":
        shifted = shift_cadence_up(cadence)
        if shifted != cadence:
            cadence = shifted
            modified = True

    return cadence, modified


def generate_maintenance_plan(selections: Iterable[AssetSelection]) -> MaintenancePlan:
    """Build a grouped maintenance schedule for the selected assets.

    Unknown asset ids are skipped.
    """
    all_tasks: list[ScheduledTask] = []
    red_flags: list[dict] = []
    # dicts keep first-seen order for both categories and task strings
    contractor_map: dict[str, dict[str, None]] = {}

    for selection in selections:
        asset = get_asset(selection.asset_id)
        if asset is None:
            logger.debug("Skipping unknown asset", extra={"asset_id": selection.asset_id})
            continue

        if asset.red_flags:
            red_flags.append(
                {"asset_id": asset.id, "asset_name": asset.name, "flags": list(asset.red_flags)}
            )

        for category in asset.contractor_categories:
            bucket = contractor_map.setdefault(category, {})
            for task in asset.tasks:
                if not task.staff_can_do:
                    bucket[f"{asset.name}: {task.description}"] = None

        for task in asset.tasks:
            cadence, modified = _modified_cadence(task.cadence, asset.asset_class, selection)
            all_tasks.append(
                ScheduledTask(
                    asset_id=asset.id,
                    asset_name=asset.name,
                    asset_class=asset.asset_class,
                    cadence=cadence,
                    description=task.description,
                    staff_can_do=task.staff_can_do,
                    doc_required=task.doc_required,
                    quantity=selection.quantity,
                    is_modified=modified,
                )
            )

        if selection.age_bucket == "13+" and asset.asset_class in CRITICAL_CLASSES:
            has_structural = any(
                task.cadence == ANNUAL and "structural" in task.description.lower()
                for task in asset.tasks
            )
            if not has_structural:
                all_tasks.append(
                    ScheduledTask(
                        asset_id=asset.id,
                        asset_name=asset.name,
                        asset_class=asset.asset_class,
                        cadence=ANNUAL,
                        description=STRUCTURAL_INSPECTION,
                        staff_can_do=False,
                        doc_required=True,
                        quantity=selection.quantity,
                        is_modified=True,
                    )
                )

    grouped: dict[str, list[ScheduledTask]] = {cadence: [] for cadence in CADENCE_ORDER}
    for task in all_tasks:
        grouped[task.cadence].append(task)
    for cadence in CADENCE_ORDER:
        grouped[cadence].sort(key=lambda t: (t.asset_class, t.asset_name))

    return MaintenancePlan(
        version=TAXONOMY_VERSION,
        generated_at=timezone.now().isoformat(),
        tasks=grouped,
        red_flags=red_flags,
        contractor_needs=[
            {"category": category, "tasks": list(tasks)}
            for category, tasks in contractor_map.items()
        ],
    )
