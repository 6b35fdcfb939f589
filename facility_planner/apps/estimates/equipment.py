"""Equipment quote calculator.

A quote has three categories (core equipment, flooring, safety & lighting)
built from sport-specific rules. Catalog-backed line items take their unit
cost from a price lookup so callers can choose between static and live
pricing. Installation is a flat 50% of equipment plus flooring.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field

from django.utils import timezone

from facility_planner.apps.pricing.cost_library import DEFAULT_TIER, cost_by_tier, get_cost_item

SPORTS = (
    "baseball_softball",
    "basketball",
    "volleyball",
    "pickleball",
    "soccer_indoor_small_sided",
    "football",
    "multi_sport",
)
SPACE_SIZES = ("small", "medium", "large")
SPACE_MULTIPLIERS = {"small": 0.8, "medium": 1.0, "large": 1.2}

INSTALLATION_RATE = 0.5
TURF_FIELD_SQFT = 20000

BASKETBALL_FLOOR_COSTS = {"hardwood": 12, "sport-tile": 8, "modular": 5}
BASKETBALL_FLOOR_LABELS = {"hardwood": "Hardwood", "sport-tile": "Sport Tile", "modular": "Modular"}
VOLLEYBALL_FLOOR_COSTS = {"wood": 12, "sport-tile": 8, "rubber": 6}
VOLLEYBALL_FLOOR_LABELS = {"wood": "Wood", "sport-tile": "Sport Tile", "rubber": "Rubber"}

PriceLookup = Callable[[str], float]


def static_price(cost_library_id: str) -> float:
    """Mid-tier cost library price, or 0 for unknown ids."""
    item = get_cost_item(cost_library_id)
    return cost_by_tier(item, DEFAULT_TIER) if item else 0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class EquipmentInputs:
    sport: str
    units: int
    space_size: str = "medium"
    flooring_type: str = ""
    special_features: tuple[str, ...] = ()
    turf_installation: bool = False
    tournament_grade: bool = False
    indoor_outdoor: str = "indoor"

    def to_dict(self) -> dict:
        return {
            "sport": self.sport,
            "units": self.units,
            "space_size": self.space_size,
            "flooring_type": self.flooring_type,
            "special_features": list(self.special_features),
            "turf_installation": self.turf_installation,
            "tournament_grade": self.tournament_grade,
            "indoor_outdoor": self.indoor_outdoor,
        }


@dataclass(frozen=True)
class LineItem:
    name: str
    quantity: float
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_cost

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit_cost": self.unit_cost,
            "total_cost": self.total_cost,
        }


@dataclass
class EquipmentCategory:
    category: str
    items: list[LineItem] = field(default_factory=list)

    @property
    def subtotal(self) -> float:
        return sum(item.total_cost for item in self.items)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
        }


@dataclass
class EquipmentQuote:
    inputs: EquipmentInputs
    categories: list[EquipmentCategory]
    equipment_total: float
    flooring_total: float
    installation_total: int
    generated_at: str

    @property
    def grand_total(self) -> float:
        return self.equipment_total + self.flooring_total + self.installation_total

    def to_dict(self) -> dict:
        return {
            "sport": self.inputs.sport,
            "inputs": self.inputs.to_dict(),
            "line_items": [category.to_dict() for category in self.categories],
            "totals": {
                "equipment": self.equipment_total,
                "flooring": self.flooring_total,
                "installation": self.installation_total,
                "grand_total": self.grand_total,
            },
            "metadata": {"generated_at": self.generated_at, "reliability": "estimated"},
        }


def _core_equipment(inputs: EquipmentInputs, price: PriceLookup) -> EquipmentCategory:
    units = inputs.units
    category = EquipmentCategory("Core Equipment")
    items = category.items

    if inputs.sport == "baseball_softball":
        items.append(LineItem("Batting Cages (70ft)", units, price("shell_cage")))
        items.append(LineItem("Protective Netting", units * 2, price("tunnel_net")))
        if "Pitching mounds" in inputs.special_features:
            items.append(LineItem("Portable Pitching Mounds", units, price("portable_mounds")))
        if "Hitting lab" in inputs.special_features:
            items.append(LineItem("Hitting Analysis Technology", 1, 15000))
    elif inputs.sport == "basketball":
        items.append(LineItem("Professional Basketball Hoops", units * 2, price("competition_hoops")))
        items.append(LineItem("Court Striping & Lines", units, 2500))
    elif inputs.sport == "volleyball":
        multiplier = 1.5 if inputs.tournament_grade else 1
        name = "Tournament Grade Net Systems" if inputs.tournament_grade else "Volleyball Net Systems"
        items.append(LineItem(name, units, price("volleyball_net_systems") * multiplier))
    elif inputs.sport == "pickleball":
        items.append(LineItem("Pickleball Net Systems", units, price("pickleball_nets")))
        items.append(LineItem("Court Striping & Lines", units, 800))
        if inputs.indoor_outdoor == "outdoor":
            items.append(LineItem("In-Ground or Surface Mount Pickleball Nets", units, 700))
        else:
            items.append(LineItem("Portable Pickleball Nets", units, 400))
    elif inputs.sport == "soccer_indoor_small_sided":
        items.append(LineItem("Soccer Goals (regulation)", units * 2, 2500))
    elif inputs.sport == "football":
        items.append(LineItem("Football Goals", 2, 8000))
    else:
        items.append(LineItem("Multi-Sport Equipment Package", 1, 25000))
    return category


def _flooring(inputs: EquipmentInputs, price: PriceLookup) -> EquipmentCategory:
    units = inputs.units
    multiplier = SPACE_MULTIPLIERS.get(inputs.space_size, 1.0)
    category = EquipmentCategory("Flooring & Surfaces")
    items = category.items

    if inputs.sport == "baseball_softball":
        if inputs.turf_installation:
            sqft = units * 1200 * multiplier
            items.append(LineItem("Artificial Turf Installation", sqft, price("turf_installed")))
    elif inputs.sport == "basketball":
        floor = inputs.flooring_type if inputs.flooring_type in BASKETBALL_FLOOR_COSTS else "sport-tile"
        items.append(
            LineItem(
                f"{BASKETBALL_FLOOR_LABELS[floor]} Flooring",
                units * 5000 * multiplier,
                BASKETBALL_FLOOR_COSTS[floor],
            )
        )
    elif inputs.sport == "volleyball":
        floor = inputs.flooring_type if inputs.flooring_type in VOLLEYBALL_FLOOR_COSTS else "sport-tile"
        items.append(
            LineItem(
                f"{VOLLEYBALL_FLOOR_LABELS[floor]} Flooring",
                units * 3000 * multiplier,
                VOLLEYBALL_FLOOR_COSTS[floor],
            )
        )
    elif inputs.sport == "pickleball":
        sqft = units * 800 * multiplier
        if "Concrete surface" in inputs.special_features:
            items.append(
                LineItem("Concrete Court Surface", sqft, price("outdoor_concrete_court") or 12)
            )
        elif inputs.indoor_outdoor == "outdoor":
            items.append(LineItem("Outdoor Court Surface", sqft, 6))
        else:
            items.append(LineItem("Indoor Court Surface", sqft, 8))
    else:
        items.append(
            LineItem(
                "Multi-Sport Turf Installation",
                TURF_FIELD_SQFT * multiplier,
                price("turf_installed"),
            )
        )
    return category


def _safety(inputs: EquipmentInputs, price: PriceLookup) -> EquipmentCategory:
    units = inputs.units
    category = EquipmentCategory("Safety & Lighting")
    items = category.items

    if inputs.sport == "baseball_softball":
        items.append(LineItem("Wall Padding & Protection", units * 100, price("safety_padding")))
    elif inputs.sport in ("basketball", "volleyball"):
        items.append(LineItem("Wall Padding", units * 80, price("safety_padding")))

    if (
        inputs.sport == "pickleball"
        and inputs.indoor_outdoor == "outdoor"
        and "Outdoor lighting" in inputs.special_features
    ):
        items.append(LineItem("Outdoor Court Lighting", units, price("outdoor_court_lighting")))
    return category


def calculate_equipment_quote(
    inputs: EquipmentInputs,
    price_lookup: PriceLookup = static_price,
) -> EquipmentQuote:
    """Build a line-item quote for one sport.

    `price_lookup` maps a cost library id to a unit price. Empty categories
    are left out of the quote but still count as zero in the totals.
    """
    core = _core_equipment(inputs, price_lookup)
    flooring = _flooring(inputs, price_lookup)
    safety = _safety(inputs, price_lookup)

    equipment_total = core.subtotal + safety.subtotal
    flooring_total = flooring.subtotal
    return EquipmentQuote(
        inputs=inputs,
        categories=[c for c in (core, flooring, safety) if c.items],
        equipment_total=equipment_total,
        flooring_total=flooring_total,
        installation_total=round_half_up((equipment_total + flooring_total) * INSTALLATION_RATE),
        generated_at=timezone.now().isoformat(),
    )
