"""Static equipment and construction cost table.

Each item carries low/mid/high unit costs plus an installation factor
expressed as a percentage of the equipment cost.
"""

from __future__ import annotations

from dataclasses import dataclass

TIERS = ("low", "mid", "high")
DEFAULT_TIER = "mid"


@dataclass(frozen=True)
class CostItem:
    id: str
    name: str
    category: str
    unit: str
    low: float
    mid: float
    high: float
    install_factor_pct: float
    description: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "cost_tiers": {"low": self.low, "mid": self.mid, "high": self.high},
            "install_factor_pct": self.install_factor_pct,
            "description": self.description,
        }


def _item(id, name, category, unit, tiers, install_pct, description) -> CostItem:
    low, mid, high = tiers
    return CostItem(id, name, category, unit, low, mid, high, install_pct, description)


COST_ITEMS: tuple[CostItem, ...] = (
    # Flooring & surfaces
    _item("turf_installed", "Turf (installed)", "flooring", "sf", (6, 8, 11), 15,
          "Indoor synthetic turf with shock pad and installation"),
    _item("sport_tile_installed", "Sport tile (installed)", "flooring", "sf", (4, 6, 8), 10,
          "Interlocking sport tile flooring with installation"),
    _item("hardwood_installed", "Hardwood (installed)", "flooring", "sf", (10, 14, 20), 20,
          "Professional hardwood court flooring with installation"),
    _item("outdoor_concrete_court", "Outdoor Concrete Court Surface", "flooring", "sf", (10, 12, 15), 0,
          "Concrete pad with acrylic sport coating for outdoor courts"),
    # Baseball / softball
    _item("tunnel_net", "Batting tunnel net", "baseball", "each", (700, 900, 1200), 5,
          "Professional batting tunnel netting system"),
    _item("pitching_machines", "Pitching machine", "baseball", "each", (2000, 2800, 3800), 3,
          "Professional pitching machine"),
    _item("curtain_cage", "CurtainCage (Collapsible)", "baseball", "each", (2500, 3000, 3500), 15,
          "Collapsible curtain-style batting cage system, most affordable option"),
    _item("shell_cage", "Batting Cage (Per Lane)", "baseball", "lane", (2500, 3000, 3500), 20,
          "Professional batting cage system per lane"),
    _item("air_cage", "AirCage (Retractable)", "baseball", "each", (13000, 15000, 17000), 25,
          "Premium electric retractable batting cage, highest-end option"),
    # Court sports
    _item("competition_hoops", "Competition hoop system", "basketball", "each", (1800, 2800, 4500), 10,
          "Professional basketball hoop and backboard system"),
    _item("volleyball_net_systems", "Volleyball net system", "volleyball", "each", (1600, 2400, 3200), 8,
          "Professional volleyball net and standards system"),
    _item("pickleball_nets", "Pickleball net", "pickleball", "each", (180, 280, 450), 5,
          "Professional pickleball net system"),
    _item("soccer_goals", "Soccer goal pair", "soccer", "pair", (700, 1100, 1800), 5,
          "Professional soccer goals (pair)"),
    # Building systems
    _item("outdoor_court_lighting", "Outdoor Court Lighting", "building_systems", "court",
          (8000, 12000, 18000), 25, "Pole-mounted LED lighting system per outdoor court"),
    _item("led_lighting", "LED lighting (installed)", "building_systems", "sf", (2, 3, 4), 20,
          "Professional LED lighting system with installation"),
    _item("hvac_installed", "HVAC (installed)", "building_systems", "sf", (5, 7, 10), 25,
          "HVAC system with installation"),
    _item("electrical_service", "Electrical Service (400A)", "building_systems", "lump sum",
          (25000, 35000, 50000), 0, "400A electrical service with panel and distribution"),
    _item("plumbing_roughin", "Plumbing Rough-in", "building_systems", "lump sum",
          (12000, 18000, 28000), 0, "Plumbing rough-in for restrooms and utilities"),
    _item("fire_sprinkler", "Fire Sprinkler System", "building_systems", "sf", (3, 4, 6), 0,
          "NFPA-compliant fire sprinkler system"),
    # Site work
    _item("chainlink_fence", "Chain-Link Fence", "site_work", "lf", (15, 20, 25), 0,
          "4-6ft chain-link fence for outdoor courts, includes posts and installation"),
    _item("vinyl_fence", "Vinyl Fence", "site_work", "lf", (25, 35, 45), 0,
          "4-6ft vinyl/PVC fence for outdoor courts, includes posts and installation"),
    _item("site_prep", "Site Preparation & Grading", "site_work", "sf", (2, 3, 5), 0,
          "Clearing, grading, and compaction for building pad"),
    _item("parking_asphalt", "Asphalt Parking Lot", "site_work", "sf", (4, 5, 7), 0,
          "Asphalt parking lot with striping"),
    _item("utilities_connection", "Utilities Connection", "site_work", "lump sum",
          (15000, 25000, 40000), 0, "Water, sewer, and gas connections to site"),
    # Safety, technology, fixtures
    _item("safety_padding", "Wall Padding", "safety", "lf", (50, 60, 75), 10,
          "Indoor wall padding for safety"),
    _item("it_security", "IT/Security (cameras + WiFi)", "technology", "lump sum",
          (5000, 8500, 15000), 15, "Security cameras and WiFi infrastructure"),
    _item("locker_restroom", "Locker/Restroom fixtures", "fixtures", "lump sum",
          (12000, 18000, 30000), 20, "Locker room and restroom fixtures and finishes"),
    _item("divider_curtains", "Divider curtains", "netting", "each", (400, 600, 900), 8,
          "Motorized divider curtains"),
    _item("l_screens", "L-screens", "protection", "each", (150, 225, 350), 0,
          "Protective L-screens for pitching"),
    # Training equipment
    _item("portable_mounds", "Portable mounds", "equipment", "each", (800, 1200, 1800), 0,
          "Portable pitching mounds"),
    _item("tees", "Batting tees", "equipment", "each", (25, 40, 65), 0,
          "Professional batting tees"),
    _item("ball_carts", "Ball carts", "equipment", "each", (120, 180, 280), 0,
          "Ball storage and transport carts"),
    _item("radar_device", "Radar speed device", "equipment", "each", (1500, 2200, 3500), 0,
          "Professional radar speed measurement device"),
    # Building structure
    _item("metal_building_shell", "Pre-Engineered Metal Building Shell", "building_structure", "sf",
          (35, 45, 60), 30,
          "Complete pre-engineered metal building shell including frame, roofing, and wall panels"),
    _item("concrete_foundation", 'Concrete Foundation (6" slab)', "building_structure", "sf",
          (8, 10, 14), 0, "6-inch reinforced concrete slab with vapor barrier and wire mesh"),
    _item("insulation_package", "Insulation Package", "building_structure", "sf", (2, 3, 5), 15,
          "Wall and roof insulation package (R-19 to R-30)"),
    # Doors & openings
    _item("rollup_door_12x14", "Roll-Up Door 12'x14'", "doors_openings", "each", (4500, 5500, 7000), 15,
          "Insulated steel roll-up overhead door 12' wide x 14' tall"),
    _item("rollup_door_10x12", "Roll-Up Door 10'x12'", "doors_openings", "each", (3500, 4500, 5500), 15,
          "Insulated steel roll-up overhead door 10' wide x 12' tall"),
    _item("man_door", "Steel Man Door (3'x7')", "doors_openings", "each", (800, 1200, 1800), 10,
          "Commercial steel personnel door with hardware"),
    _item("storefront_entry", "Glass Storefront Entry", "doors_openings", "each", (6000, 8500, 12000), 15,
          "Double-door aluminum storefront entry with glass"),
    _item("window_4x4", "Window 4'x4' (insulated)", "doors_openings", "each", (600, 900, 1400), 10,
          "Fixed insulated window 4' x 4'"),
)

COST_LIBRARY: dict[str, CostItem] = {item.id: item for item in COST_ITEMS}


def get_cost_item(item_id: str) -> CostItem | None:
    return COST_LIBRARY.get(item_id)


def cost_by_tier(item: CostItem, tier: str) -> float:
    if tier not in TIERS:
        raise ValueError(f"Unknown cost tier: {tier}")
    return getattr(item, tier)


def item_total(item: CostItem, quantity: float, tier: str) -> float:
    """Quantity times tier cost, plus the installation factor."""
    install_factor = 1 + (item.install_factor_pct or 0) / 100
    return quantity * cost_by_tier(item, tier) * install_factor
