from django.apps import AppConfig


class EstimatesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "facility_planner.apps.estimates"
    verbose_name = "Estimates"
