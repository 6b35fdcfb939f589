import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(db_index=True, max_length=255)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("business_name", models.CharField(blank=True, max_length=200)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("state", models.CharField(blank=True, max_length=50)),
                ("message", models.TextField(blank=True, max_length=1000)),
                ("partnership_type", models.CharField(blank=True, max_length=100)),
                ("allow_outreach", models.BooleanField(default=False)),
                ("facility_type", models.CharField(blank=True, max_length=100)),
                ("facility_size", models.CharField(blank=True, max_length=100)),
                ("sports", models.CharField(blank=True, max_length=255)),
                ("estimated_square_footage", models.PositiveIntegerField(blank=True, null=True)),
                ("estimated_budget", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                (
                    "estimated_monthly_revenue",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True),
                ),
                ("estimated_roi", models.FloatField(blank=True, null=True)),
                ("break_even_months", models.FloatField(blank=True, null=True)),
                ("source", models.CharField(db_index=True, max_length=50)),
                ("user_agent", models.CharField(blank=True, max_length=500)),
                ("referrer", models.CharField(blank=True, max_length=500)),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("synced_to_google_sheets", models.BooleanField(default=False)),
                ("sync_error", models.TextField(blank=True)),
                ("sync_attempted_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["created_at"], name="lead_created_at_idx")],
            },
        ),
        migrations.CreateModel(
            name="WizardSubmission",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("facility_type", models.CharField(blank=True, max_length=100)),
                ("facility_size", models.CharField(blank=True, max_length=100)),
                ("selected_sports", models.JSONField(blank=True, default=list)),
                ("total_square_footage", models.PositiveIntegerField(blank=True, null=True)),
                ("total_investment", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("monthly_revenue", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("monthly_opex", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("break_even_months", models.FloatField(blank=True, null=True)),
                ("roi_percentage", models.FloatField(blank=True, null=True)),
                ("wizard_responses", models.JSONField(blank=True, default=dict)),
                ("recommendations", models.JSONField(blank=True, default=dict)),
                ("financial_metrics", models.JSONField(blank=True, default=dict)),
                ("business_model", models.CharField(blank=True, max_length=100)),
                ("location_type", models.CharField(blank=True, max_length=100)),
                ("timeline", models.CharField(blank=True, max_length=100)),
                (
                    "lead",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="wizard_submissions",
                        to="leads.lead",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
