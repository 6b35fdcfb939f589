"""JSON endpoints for equipment quotes and financial projections."""

from __future__ import annotations

from django.http import JsonResponse

from facility_planner.apps.core.http import JsonApiView, form_error_response, json_error
from facility_planner.apps.estimates.equipment import calculate_equipment_quote
from facility_planner.apps.estimates.financials import (
    calculate_opex,
    calculate_profitability,
    calculate_revenue,
)
from facility_planner.apps.estimates.forms import EquipmentQuoteForm, ProjectionForm
from facility_planner.apps.pricing.services import get_live_price


def live_mid_price(cost_library_id: str) -> float:
    return get_live_price(cost_library_id, "mid").price


class EquipmentQuoteView(JsonApiView):
    """Quote priced from live vendor data where available."""

    def post(self, request):
        form = EquipmentQuoteForm(data=self.payload)
        if not form.is_valid():
            return form_error_response(form, "Invalid quote request")
        quote = calculate_equipment_quote(form.to_inputs(), live_mid_price)
        return JsonResponse(quote.to_dict())


class ProjectionView(JsonApiView):
    def post(self, request):
        form = ProjectionForm(data=self.payload)
        if not form.is_valid():
            return form_error_response(form, "Invalid projection request")
        data = form.cleaned_data
        try:
            opex = calculate_opex(data.get("gross_sf") or 0, data["opex"])
            revenue = calculate_revenue(data["revenue"])
        except (TypeError, ValueError, AttributeError):
            return json_error("Projection inputs must be numbers")

        profitability = calculate_profitability(
            data["capex_total"], revenue.total, opex.total, opex.debt_service_monthly
        )
        return JsonResponse(
            {
                "opex": opex.to_dict(),
                "revenue": revenue.to_dict(),
                "profitability": profitability.to_dict(),
            }
        )
