from django import forms

from facility_planner.apps.wizards.models import ProjectMode


class BusinessPlanDraftForm(forms.Form):
    email = forms.EmailField(max_length=255)
    name = forms.CharField(max_length=100, required=False)
    current_step = forms.IntegerField(min_value=0, max_value=50, required=False)

    def clean_email(self):
        return self.cleaned_data["email"].lower()


class NewProjectForm(forms.Form):
    mode = forms.ChoiceField(choices=ProjectMode.choices, required=False)
