from django.apps import AppConfig


class WizardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "facility_planner.apps.wizards"
    verbose_name = "Wizards"
