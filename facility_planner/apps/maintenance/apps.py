from django.apps import AppConfig


class MaintenanceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "facility_planner.apps.maintenance"
    verbose_name = "Maintenance Plans"
