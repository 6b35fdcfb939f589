"""Validation for estimate requests."""

from __future__ import annotations

from django import forms

from facility_planner.apps.estimates.equipment import SPACE_SIZES, SPORTS, EquipmentInputs

SPECIAL_FEATURES = ("Pitching mounds", "Hitting lab", "Concrete surface", "Outdoor lighting")


def _choices(values):
    return [(value, value) for value in values]


class EquipmentQuoteForm(forms.Form):
    sport = forms.ChoiceField(choices=_choices(SPORTS))
    units = forms.IntegerField(min_value=1, max_value=100)
    space_size = forms.ChoiceField(choices=_choices(SPACE_SIZES), required=False)
    flooring_type = forms.CharField(max_length=50, required=False)
    special_features = forms.MultipleChoiceField(
        choices=_choices(SPECIAL_FEATURES), required=False
    )
    turf_installation = forms.BooleanField(required=False)
    tournament_grade = forms.BooleanField(required=False)
    indoor_outdoor = forms.ChoiceField(
        choices=_choices(("indoor", "outdoor")), required=False
    )

    def to_inputs(self) -> EquipmentInputs:
        data = self.cleaned_data
        return EquipmentInputs(
            sport=data["sport"],
            units=data["units"],
            space_size=data.get("space_size") or "medium",
            flooring_type=data.get("flooring_type", ""),
            special_features=tuple(data.get("special_features") or ()),
            turf_installation=data.get("turf_installation", False),
            tournament_grade=data.get("tournament_grade", False),
            indoor_outdoor=data.get("indoor_outdoor") or "indoor",
        )


class ProjectionForm(forms.Form):
    """Capital total plus the operating and revenue assumption objects."""

    capex_total = forms.FloatField(min_value=0)
    gross_sf = forms.FloatField(min_value=0, required=False)
    opex = forms.JSONField(required=False)
    revenue = forms.JSONField(required=False)

    def _clean_object(self, name):
        value = self.cleaned_data.get(name) or {}
        if not isinstance(value, dict):
            raise forms.ValidationError("Must be an object.")
        return value

    def clean_opex(self):
        return self._clean_object("opex")

    def clean_revenue(self):
        return self._clean_object("revenue")
