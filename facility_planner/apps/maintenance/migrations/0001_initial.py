import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SavedMaintenancePlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("email", models.EmailField(max_length=255, unique=True)),
                ("name", models.CharField(blank=True, max_length=100)),
                ("facility_name", models.CharField(blank=True, max_length=200)),
                ("location_city", models.CharField(blank=True, max_length=100)),
                ("location_state", models.CharField(blank=True, max_length=50)),
                ("location_zip", models.CharField(blank=True, max_length=10)),
                ("sports", models.JSONField(blank=True, default=list)),
                ("selected_assets", models.JSONField(blank=True, default=list)),
                ("plan_data", models.JSONField(blank=True, default=dict)),
                ("plan_version", models.CharField(blank=True, max_length=20)),
                ("reminder_preferences", models.JSONField(blank=True, default=dict)),
                ("reminders_active", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["-updated_at"],
            },
        ),
        migrations.CreateModel(
            name="MaintenanceReminder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "cadence",
                    models.CharField(
                        choices=[
                            ("daily", "Daily"),
                            ("weekly", "Weekly"),
                            ("monthly", "Monthly"),
                            ("quarterly", "Quarterly"),
                            ("annual", "Annual"),
                        ],
                        max_length=20,
                    ),
                ),
                ("recipients", models.JSONField(default=list)),
                ("next_send_at", models.DateTimeField(db_index=True)),
                ("last_sent_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                (
                    "plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reminders",
                        to="maintenance.savedmaintenanceplan",
                    ),
                ),
            ],
            options={
                "ordering": ["next_send_at"],
            },
        ),
    ]
