"""Tests for the equipment quote calculator."""

from decimal import Decimal

from django.test import SimpleTestCase, TestCase, tag

from facility_planner.apps.core.test_utils import JsonApiTestCase, create_product_pricing
from facility_planner.apps.estimates.equipment import (
    EquipmentInputs,
    calculate_equipment_quote,
    round_half_up,
)
from facility_planner.apps.pricing.models import SyncStatus
from facility_planner.apps.pricing.services import invalidate_price_cache


def line_names(quote):
    return [item.name for category in quote.categories for item in category.items]


@tag("estimates")
class EquipmentQuoteTests(SimpleTestCase):
    def test_baseball_quote(self):
        """Two cages: cages, double netting, padding; installation is half of the rest."""
        quote = calculate_equipment_quote(EquipmentInputs(sport="baseball_softball", units=2))

        # 2 x 3000 cages + 4 x 900 netting + 200 lf x 60 padding
        self.assertEqual(quote.equipment_total, 6000 + 3600 + 12000)
        self.assertEqual(quote.flooring_total, 0)
        self.assertEqual(quote.installation_total, 10800)
        self.assertEqual(quote.grand_total, 21600 + 10800)

    def test_empty_flooring_category_is_omitted(self):
        """Without turf, baseball quotes have no flooring category."""
        quote = calculate_equipment_quote(EquipmentInputs(sport="baseball_softball", units=1))

        self.assertNotIn("Flooring & Surfaces", [c.category for c in quote.categories])

    def test_baseball_turf_scales_with_space(self):
        """Turf area is 1200 sf per cage times the space multiplier."""
        quote = calculate_equipment_quote(
            EquipmentInputs(
                sport="baseball_softball", units=1, space_size="large", turf_installation=True
            )
        )

        self.assertAlmostEqual(quote.flooring_total, 1200 * 1.2 * 8)

    def test_baseball_special_features(self):
        """Mounds and the hitting lab add their own lines."""
        quote = calculate_equipment_quote(
            EquipmentInputs(
                sport="baseball_softball",
                units=1,
                special_features=("Pitching mounds", "Hitting lab"),
            )
        )

        self.assertIn("Portable Pitching Mounds", line_names(quote))
        self.assertIn("Hitting Analysis Technology", line_names(quote))

    def test_basketball_defaults_to_sport_tile(self):
        """Unknown flooring types fall back to sport tile at $8/sf."""
        quote = calculate_equipment_quote(
            EquipmentInputs(sport="basketball", units=1, flooring_type="marble")
        )

        self.assertIn("Sport Tile Flooring", line_names(quote))
        self.assertEqual(quote.flooring_total, 40000)

    def test_tournament_grade_volleyball(self):
        """Tournament grade nets cost one and a half times the standard system."""
        quote = calculate_equipment_quote(
            EquipmentInputs(sport="volleyball", units=1, tournament_grade=True)
        )
        nets = quote.categories[0].items[0]

        self.assertEqual(nets.name, "Tournament Grade Net Systems")
        self.assertEqual(nets.unit_cost, 3600)

    def test_outdoor_pickleball_lighting(self):
        """Outdoor pickleball adds pole lighting only when requested."""
        inputs = EquipmentInputs(
            sport="pickleball",
            units=2,
            indoor_outdoor="outdoor",
            special_features=("Outdoor lighting", "Concrete surface"),
        )
        quote = calculate_equipment_quote(inputs)

        self.assertIn("Outdoor Court Lighting", line_names(quote))
        self.assertIn("Concrete Court Surface", line_names(quote))
        self.assertIn("In-Ground or Surface Mount Pickleball Nets", line_names(quote))

    def test_multi_sport_package(self):
        """Unlisted sports get the fallback package and a turf field."""
        quote = calculate_equipment_quote(EquipmentInputs(sport="multi_sport", units=1))

        self.assertIn("Multi-Sport Equipment Package", line_names(quote))
        self.assertEqual(quote.flooring_total, 20000 * 8)

    def test_price_lookup_is_used(self):
        """Catalog-backed lines take their unit cost from the lookup."""
        quote = calculate_equipment_quote(
            EquipmentInputs(sport="soccer_indoor_small_sided", units=1),
            price_lookup=lambda cost_id: 5 if cost_id == "turf_installed" else 0,
        )

        self.assertEqual(quote.flooring_total, 100000)

    def test_round_half_up(self):
        """Halves round away from zero."""
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)


@tag("estimates", "views")
class EquipmentQuoteViewTests(JsonApiTestCase):
    def setUp(self):
        invalidate_price_cache()

    def tearDown(self):
        invalidate_price_cache()

    def test_quote_uses_live_prices(self):
        """A synced vendor price replaces the library price."""
        create_product_pricing(
            "competition_hoops",
            scraped_price=Decimal("3000"),
            sync_status=SyncStatus.SUCCESS,
        )

        response = self.post_json("/api/estimates/equipment-quote/", {"sport": "basketball", "units": 1})

        self.assertEqual(response.status_code, 200)
        hoops = response.json()["line_items"][0]["items"][0]
        self.assertEqual(hoops["unit_cost"], 3000.0)
        self.assertEqual(hoops["quantity"], 2)

    def test_invalid_request(self):
        """Unknown sports are rejected with field details."""
        response = self.post_json("/api/estimates/equipment-quote/", {"sport": "curling", "units": 0})

        self.assertEqual(response.status_code, 400)
        self.assertIn("sport", response.json()["details"])
        self.assertIn("units", response.json()["details"])
