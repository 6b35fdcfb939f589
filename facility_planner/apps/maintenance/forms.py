"""Validation for maintenance plan requests."""

from __future__ import annotations

from django import forms
from django.core.validators import RegexValidator

from facility_planner.apps.maintenance.catalog import SPORTS
from facility_planner.apps.maintenance.engine import (
    AGE_BUCKETS,
    CADENCE_ORDER,
    USAGE_INTENSITIES,
    AssetSelection,
)
from facility_planner.apps.maintenance.reminders import WEEKDAYS, ReminderPreferences

MAX_SELECTIONS = 100


def _choices(values):
    return [(value, value) for value in values]


class AssetSelectionForm(forms.Form):
    """One selected asset. Missing attributes take the wizard defaults."""

    asset_id = forms.CharField(max_length=100)
    quantity = forms.IntegerField(min_value=1, max_value=1000, required=False)
    age_bucket = forms.ChoiceField(choices=_choices(AGE_BUCKETS), required=False)
    usage_intensity = forms.ChoiceField(choices=_choices(USAGE_INTENSITIES), required=False)
    motorized = forms.BooleanField(required=False)

    def to_selection(self) -> AssetSelection:
        data = self.cleaned_data
        return AssetSelection(
            asset_id=data["asset_id"],
            quantity=data.get("quantity") or 1,
            age_bucket=data.get("age_bucket") or "0-3",
            usage_intensity=data.get("usage_intensity") or "moderate",
            motorized=data.get("motorized", False),
        )


def parse_selections(raw) -> tuple[list[AssetSelection], dict[str, list[str]]]:
    """Validate a JSON list of selections.

    Returns (selections, errors). Error keys look like `selections[2].quantity`.
    Unknown asset ids are not an error here; the engine skips them.
    """
    if not isinstance(raw, list):
        return [], {"selections": ["Must be a list of asset selections."]}
    if len(raw) > MAX_SELECTIONS:
        return [], {"selections": [f"At most {MAX_SELECTIONS} assets can be selected."]}

    selections: list[AssetSelection] = []
    errors: dict[str, list[str]] = {}
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            errors[f"selections[{index}]"] = ["Must be an object."]
            continue
        form = AssetSelectionForm(data=item)
        if form.is_valid():
            selections.append(form.to_selection())
        else:
            for field, messages in form.errors.items():
                errors[f"selections[{index}].{field}"] = [str(m) for m in messages]
    return selections, errors


class ReminderPreferencesForm(forms.Form):
    enabled = forms.BooleanField(required=False)
    cadences = forms.MultipleChoiceField(choices=_choices(CADENCE_ORDER), required=False)
    preferred_day = forms.ChoiceField(choices=_choices(WEEKDAYS), required=False)
    preferred_time = forms.CharField(
        required=False,
        validators=[RegexValidator(r"^([01]\d|2[0-3]):[0-5]\d$", "Use 24-hour HH:MM.")],
    )
    additional_recipients = forms.JSONField(required=False)

    def clean_additional_recipients(self):
        value = self.cleaned_data.get("additional_recipients") or []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, list):
            raise forms.ValidationError("Must be a list or comma-separated string.")
        return [str(addr).strip() for addr in value if str(addr).strip()]

    def to_preferences(self) -> ReminderPreferences:
        data = self.cleaned_data
        prefs = ReminderPreferences(enabled=data["enabled"])
        if data.get("cadences"):
            prefs.cadences = list(data["cadences"])
        prefs.preferred_day = data.get("preferred_day") or prefs.preferred_day
        prefs.preferred_time = data.get("preferred_time") or prefs.preferred_time
        prefs.additional_recipients = data["additional_recipients"]
        return prefs


class PlanContactForm(forms.Form):
    """Who the plan belongs to and where the facility is."""

    email = forms.EmailField(max_length=255)
    name = forms.CharField(max_length=100, required=False)
    facility_name = forms.CharField(max_length=200, required=False)
    location_city = forms.CharField(max_length=100, required=False)
    location_state = forms.CharField(max_length=50, required=False)
    location_zip = forms.CharField(max_length=10, required=False)
    sports = forms.MultipleChoiceField(choices=_choices(SPORTS), required=False)

    def clean_email(self):
        return self.cleaned_data["email"].strip().lower()
