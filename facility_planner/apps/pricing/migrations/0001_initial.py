import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductPricing",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("cost_library_id", models.CharField(max_length=100, unique=True)),
                ("product_name", models.CharField(max_length=200)),
                ("vendor", models.CharField(blank=True, max_length=100)),
                ("product_url", models.URLField(blank=True, max_length=500)),
                ("scraped_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "sync_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("success", "Success"),
                            ("no_price_found", "No price found"),
                            ("error", "Error"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("sync_error", models.TextField(blank=True)),
                ("last_synced_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("fallback_override_low", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fallback_override_mid", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fallback_override_high", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
            ],
            options={
                "verbose_name": "product pricing",
                "verbose_name_plural": "product pricing",
                "ordering": ["cost_library_id"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalProductPricing",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("cost_library_id", models.CharField(db_index=True, max_length=100)),
                ("product_name", models.CharField(max_length=200)),
                ("vendor", models.CharField(blank=True, max_length=100)),
                ("product_url", models.URLField(blank=True, max_length=500)),
                ("scraped_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "sync_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("success", "Success"),
                            ("no_price_found", "No price found"),
                            ("error", "Error"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("sync_error", models.TextField(blank=True)),
                ("last_synced_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("fallback_override_low", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fallback_override_mid", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fallback_override_high", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical product pricing",
                "verbose_name_plural": "historical product pricing",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
