from django.apps import AppConfig


class PricingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "facility_planner.apps.pricing"
    verbose_name = "Pricing"
