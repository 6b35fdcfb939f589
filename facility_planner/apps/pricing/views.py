"""JSON endpoints for live pricing."""

from __future__ import annotations

from django.http import JsonResponse

from facility_planner.apps.core.http import JsonApiView, json_error
from facility_planner.apps.core.mixins import StaffRequiredJsonMixin
from facility_planner.apps.pricing.cost_library import COST_LIBRARY, DEFAULT_TIER, TIERS
from facility_planner.apps.pricing.services import get_live_price
from facility_planner.apps.pricing.sync import sync_pricing


class LivePriceView(JsonApiView):
    """Current prices for `?ids=a,b` (default: the whole cost library)."""

    def get(self, request):
        tier = request.GET.get("tier", DEFAULT_TIER)
        if tier not in TIERS:
            return json_error(f"Unknown tier: {tier}")
        ids = [i for i in request.GET.get("ids", "").split(",") if i] or list(COST_LIBRARY)
        return JsonResponse(
            {"tier": tier, "prices": {i: get_live_price(i, tier).to_dict() for i in ids}}
        )


class SyncPricingView(StaffRequiredJsonMixin, JsonApiView):
    """Staff-only: scrape vendor pages now and report per-product results."""

    def post(self, request):
        cost_library_id = self.payload.get("cost_library_id")
        if self.payload.get("sync_all"):
            cost_library_id = None
        return JsonResponse(sync_pricing(cost_library_id))
