"""Maintenance asset taxonomy.

Static reference data describing the equipment a facility can own, the
baseline maintenance tasks for each asset, the warning signs that mean the
asset should be pulled from use, and the contractor trades needed for work
staff cannot do themselves.

Asset classes run from A (highest consequence of failure) to F (portable
equipment). Classes A and B are the ones whose inspection cadence tightens as
the equipment ages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

TAXONOMY_VERSION = "2025.1"

ASSET_CLASS_LABELS: dict[str, str] = {
    "A": "Overhead & Suspended Systems",
    "B": "Athlete-Contact Safety Equipment",
    "C": "Mechanical & Motorized Equipment",
    "D": "Playing Surfaces",
    "E": "Building Systems",
    "F": "Portable Equipment",
}

# Sport keys shared with the equipment quote
SPORTS: tuple[str, ...] = (
    "baseball_softball",
    "basketball",
    "volleyball",
    "pickleball",
    "soccer_indoor_small_sided",
    "football",
    "multi_sport",
)


@dataclass(frozen=True)
class MaintenanceTask:
    """Baseline task template attached to an asset."""

    cadence: str
    description: str
    staff_can_do: bool
    doc_required: bool


@dataclass(frozen=True)
class MaintenanceAsset:
    """A catalog entry. Immutable reference data."""

    id: str
    name: str
    description: str
    asset_class: str
    sports: tuple[str, ...]
    motorized_option: bool
    tasks: tuple[MaintenanceTask, ...]
    red_flags: tuple[str, ...] = ()
    contractor_categories: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "asset_class": self.asset_class,
            "asset_class_label": ASSET_CLASS_LABELS[self.asset_class],
            "sports": list(self.sports),
            "motorized_option": self.motorized_option,
            "tasks": [
                {
                    "cadence": task.cadence,
                    "description": task.description,
                    "staff_can_do": task.staff_can_do,
                    "doc_required": task.doc_required,
                }
                for task in self.tasks
            ],
            "red_flags": list(self.red_flags),
            "contractor_categories": list(self.contractor_categories),
        }


def _task(cadence: str, description: str, staff: bool = True, doc: bool = False) -> MaintenanceTask:
    return MaintenanceTask(
        cadence=cadence, description=description, staff_can_do=staff, doc_required=doc
    )


MAINTENANCE_ASSETS: tuple[MaintenanceAsset, ...] = (
    # Class A: overhead and suspended systems
    MaintenanceAsset(
        id="batting-cage-net",
        name="Batting Cage Nets",
        description="Suspended tunnel nets, cables and retraction hardware for hitting lanes.",
        asset_class="A",
        sports=("baseball_softball", "multi_sport"),
        motorized_option=True,
        tasks=(
            _task("daily", "Walk each lane and check netting for holes or loose ties"),
            _task("quarterly", "Inspect cage nets, cables, and attachment hardware", doc=True),
            _task(
                "annual",
                "Professional inspection of ceiling anchors and retraction winches",
                staff=False,
                doc=True,
            ),
        ),
        red_flags=(
            "Frayed or kinked support cable",
            "Net sagging below the design height",
            "Winch slipping or making grinding noises",
        ),
        contractor_categories=("Netting & Cage Installer",),
    ),
    MaintenanceAsset(
        id="ceiling-basketball-goal",
        name="Ceiling-Suspended Basketball Goals",
        description="Retractable ceiling-mounted backstops with electric winches.",
        asset_class="A",
        sports=("basketball", "multi_sport"),
        motorized_option=True,
        tasks=(
            _task("weekly", "Check backboard, rim and net for damage"),
            _task("quarterly", "Test raise/lower operation and safety strap", doc=True),
            _task(
                "annual",
                "Structural inspection of mounting frame and ceiling attachments",
                staff=False,
                doc=True,
            ),
        ),
        red_flags=(
            "Backstop drifts when stored",
            "Cracked welds or bent frame members",
        ),
        contractor_categories=("Gym Equipment Installer", "Structural Engineer"),
    ),
    MaintenanceAsset(
        id="divider-curtain",
        name="Gym Divider Curtains",
        description="Motorized or manual vinyl/mesh curtains separating courts.",
        asset_class="A",
        sports=("basketball", "volleyball", "pickleball", "multi_sport"),
        motorized_option=True,
        tasks=(
            _task("monthly", "Run the curtain through a full cycle and check for snags"),
            _task("quarterly", "Inspect pipe battens, belts and end clamps", doc=True),
            _task("annual", "Service curtain motor and limit switches", staff=False, doc=True),
        ),
        red_flags=("Curtain lifts unevenly", "Torn belts or frayed lift straps"),
        contractor_categories=("Gym Equipment Installer",),
    ),
    # Class B: athlete-contact safety equipment
    MaintenanceAsset(
        id="wall-padding",
        name="Wall & Column Padding",
        description="Vinyl-covered foam panels on walls, columns and under goals.",
        asset_class="B",
        sports=("basketball", "volleyball", "baseball_softball", "football", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Wipe and disinfect padding surfaces"),
            _task("quarterly", "Check panel fastening and foam compression"),
            _task("annual", "Replace torn covers and compressed panels", staff=False),
        ),
        red_flags=("Exposed foam or torn vinyl", "Panels pulling away from the wall"),
        contractor_categories=("Padding Supplier",),
    ),
    MaintenanceAsset(
        id="volleyball-system",
        name="Volleyball Standards & Nets",
        description="Floor-socket volleyball uprights, nets and pole pads.",
        asset_class="B",
        sports=("volleyball", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Check net tension cable and pole padding"),
            _task("quarterly", "Inspect floor sockets and winch ratchets", doc=True),
        ),
        red_flags=("Floor socket loose or cracked", "Ratchet will not hold tension"),
        contractor_categories=("Gym Equipment Installer",),
    ),
    MaintenanceAsset(
        id="portable-basketball-goal",
        name="Portable Basketball Goals",
        description="Counterweighted portable backstops.",
        asset_class="B",
        sports=("basketball", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Check base padding and wheel locks"),
            _task("quarterly", "Inspect height adjustment and counterweight"),
            _task("annual", "Structural check of boom and base welds", staff=False, doc=True),
        ),
        red_flags=("Goal tips or rocks under load",),
        contractor_categories=("Gym Equipment Installer",),
    ),
    # Class C: mechanical and motorized equipment
    MaintenanceAsset(
        id="pitching-machine",
        name="Pitching Machines",
        description="Wheel or arm pitching machines and auto-feeders.",
        asset_class="C",
        sports=("baseball_softball",),
        motorized_option=True,
        tasks=(
            _task("daily", "Inspect wheels and feed chute before use"),
            _task("monthly", "Clean wheels and check tire pressure"),
            _task("quarterly", "Inspect motors, belts and wiring"),
            _task("annual", "Factory service of drive motors", staff=False),
        ),
        red_flags=("Inconsistent ball speed", "Exposed wiring or damaged cord"),
        contractor_categories=("Equipment Service Technician",),
    ),
    # Class D: playing surfaces
    MaintenanceAsset(
        id="synthetic-turf",
        name="Synthetic Turf",
        description="Infilled or shock-pad turf for fields and training areas.",
        asset_class="D",
        sports=("baseball_softball", "soccer_indoor_small_sided", "football", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Groom and redistribute infill in high-traffic zones"),
            _task("quarterly", "Check seams and inlaid lines"),
            _task("annual", "G-max impact test", staff=False, doc=True),
        ),
        red_flags=("Open seams or lifted edges", "Infill worn down to the backing in batter's boxes"),
        contractor_categories=("Turf Specialist",),
    ),
    MaintenanceAsset(
        id="hardwood-court",
        name="Hardwood Court",
        description="Maple sports floor with finish and game lines.",
        asset_class="D",
        sports=("basketball", "volleyball", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("daily", "Dust mop the playing surface"),
            _task("monthly", "Auto-scrub with approved floor cleaner"),
            _task("annual", "Screen and recoat finish", staff=False),
        ),
        red_flags=("Cupping or dead spots", "Finish worn through to bare wood"),
        contractor_categories=("Flooring Contractor",),
    ),
    MaintenanceAsset(
        id="sport-tile",
        name="Sport Tile Courts",
        description="Interlocking polypropylene court tiles.",
        asset_class="D",
        sports=("pickleball", "basketball", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Sweep and spot clean tiles"),
            _task("quarterly", "Check tile locks along edges and seams"),
        ),
        red_flags=("Tiles separating along seams",),
    ),
    # Class E: building systems
    MaintenanceAsset(
        id="hvac-system",
        name="HVAC & Dehumidification",
        description="Rooftop units, destratification fans and dehumidifiers.",
        asset_class="E",
        sports=SPORTS,
        motorized_option=False,
        tasks=(
            _task("monthly", "Replace or clean return-air filters"),
            _task("quarterly", "Preventive maintenance visit", staff=False, doc=True),
        ),
        red_flags=("Condensation on the playing surface",),
        contractor_categories=("HVAC Contractor",),
    ),
    MaintenanceAsset(
        id="sports-lighting",
        name="LED Sports Lighting",
        description="High-bay LED fixtures and lighting controls.",
        asset_class="E",
        sports=SPORTS,
        motorized_option=False,
        tasks=(
            _task("monthly", "Walk the facility and log failed fixtures"),
            _task("annual", "Light-level survey and controls check", staff=False, doc=True),
        ),
        contractor_categories=("Electrical Contractor",),
    ),
    # Class F: portable equipment
    MaintenanceAsset(
        id="l-screen",
        name="L-Screens & Protective Screens",
        description="Pitcher and feeder protection screens.",
        asset_class="F",
        sports=("baseball_softball",),
        motorized_option=False,
        tasks=(
            _task("weekly", "Check netting and frame joints"),
            _task("quarterly", "Replace worn screen netting"),
        ),
        red_flags=("Holes larger than a baseball",),
    ),
    MaintenanceAsset(
        id="soccer-goal",
        name="Soccer Goals",
        description="Portable indoor goals with anchoring weights.",
        asset_class="F",
        sports=("soccer_indoor_small_sided", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Verify goals are anchored or weighted", doc=True),
            _task("quarterly", "Inspect net hooks and frame joints"),
        ),
        red_flags=("Goal not anchored when in use",),
    ),
    MaintenanceAsset(
        id="pickleball-net",
        name="Pickleball Nets",
        description="Portable and permanent pickleball net systems.",
        asset_class="F",
        sports=("pickleball", "multi_sport"),
        motorized_option=False,
        tasks=(
            _task("weekly", "Check net height at center and posts"),
            _task("annual", "Replace worn nets and center straps"),
        ),
    ),
)

_ASSETS_BY_ID: dict[str, MaintenanceAsset] = {asset.id: asset for asset in MAINTENANCE_ASSETS}


def get_asset(asset_id: str) -> MaintenanceAsset | None:
    """Return the catalog entry for `asset_id`, or None when unknown."""
    return _ASSETS_BY_ID.get(asset_id)


def assets_for_sports(sports: Iterable[str]) -> list[MaintenanceAsset]:
    """Assets used by at least one of `sports`, in catalog order."""
    wanted = set(sports)
    return [asset for asset in MAINTENANCE_ASSETS if wanted.intersection(asset.sports)]
