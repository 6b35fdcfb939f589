"""Server-side validation for lead capture forms."""

from __future__ import annotations

from django import forms
from django.core.validators import RegexValidator

NAME_VALIDATOR = RegexValidator(
    r"^[a-zA-Z\s'-]+$",
    "Name can only contain letters, spaces, hyphens, and apostrophes",
)
PHONE_VALIDATOR = RegexValidator(r"^[\d\s\-\+\(\)]+$", "Invalid phone number format")


class LeadForm(forms.Form):
    """Contact fields shared by every lead source.

    `website` is a honeypot: people never see it, bots fill it in.
    """

    name = forms.CharField(
        min_length=2,
        max_length=100,
        validators=[NAME_VALIDATOR],
        error_messages={
            "min_length": "Name must be at least 2 characters",
            "max_length": "Name must be less than 100 characters",
        },
    )
    email = forms.EmailField(
        max_length=255,
        error_messages={"invalid": "Please enter a valid email address"},
    )
    phone = forms.CharField(
        required=False,
        min_length=10,
        max_length=20,
        validators=[PHONE_VALIDATOR],
        error_messages={
            "min_length": "Phone number must be at least 10 digits",
            "max_length": "Phone number must be less than 20 characters",
        },
    )
    business_name = forms.CharField(required=False, max_length=200)
    city = forms.CharField(required=False, max_length=100)
    state = forms.CharField(required=False, max_length=50)
    message = forms.CharField(required=False, max_length=1000)
    partnership_type = forms.CharField(required=False, max_length=100)
    allow_outreach = forms.BooleanField(required=False)
    website = forms.CharField(required=False, strip=False)

    # Wizard context, all optional
    source = forms.CharField(required=False, max_length=50)
    facility_type = forms.CharField(required=False, max_length=100)
    facility_size = forms.CharField(required=False, max_length=100)
    sports = forms.CharField(required=False, max_length=255)
    estimated_square_footage = forms.IntegerField(required=False, min_value=0)
    estimated_budget = forms.DecimalField(required=False, min_value=0, max_digits=12, decimal_places=2)
    estimated_monthly_revenue = forms.DecimalField(
        required=False, min_value=0, max_digits=12, decimal_places=2
    )
    estimated_roi = forms.FloatField(required=False)
    break_even_months = forms.FloatField(required=False, min_value=0)

    def clean_email(self):
        return self.cleaned_data["email"].strip().lower()

    def clean_website(self):
        if self.cleaned_data.get("website"):
            raise forms.ValidationError("Invalid submission")
        return ""

    def clean_sports(self):
        sports = self.data.get("sports")
        if isinstance(sports, list):
            return ", ".join(str(s).strip() for s in sports if str(s).strip())[:255]
        return self.cleaned_data.get("sports", "")


def sanitize_lead_data(data: dict) -> dict:
    """Trim every string value, lower-case the email, and blank the honeypot."""
    sanitized = {key: value.strip() if isinstance(value, str) else value for key, value in data.items()}
    if sanitized.get("email"):
        sanitized["email"] = sanitized["email"].lower()
    sanitized["website"] = ""
    return sanitized


class WizardReportForm(forms.Form):
    """The optional report snapshot posted alongside a wizard lead."""

    selected_sports = forms.JSONField(required=False)
    monthly_opex = forms.DecimalField(required=False, min_value=0, max_digits=12, decimal_places=2)
    wizard_responses = forms.JSONField(required=False)
    recommendations = forms.JSONField(required=False)
    financial_metrics = forms.JSONField(required=False)
    business_model = forms.CharField(required=False, max_length=100)
    location_type = forms.CharField(required=False, max_length=100)
    timeline = forms.CharField(required=False, max_length=100)

    def clean_selected_sports(self):
        sports = self.cleaned_data.get("selected_sports") or []
        if not isinstance(sports, list) or not all(isinstance(s, str) for s in sports):
            raise forms.ValidationError("Must be a list of sport names.")
        return sports

    def _clean_object(self, field: str) -> dict:
        value = self.cleaned_data.get(field) or {}
        if not isinstance(value, dict):
            raise forms.ValidationError("Must be an object.")
        return value

    def clean_wizard_responses(self):
        return self._clean_object("wizard_responses")

    def clean_recommendations(self):
        return self._clean_object("recommendations")

    def clean_financial_metrics(self):
        return self._clean_object("financial_metrics")
