from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "facility_planner.apps.core"
    verbose_name = "Core"
