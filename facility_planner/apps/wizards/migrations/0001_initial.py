from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BusinessPlanDraft",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("resume_token", models.CharField(max_length=32, unique=True)),
                ("email", models.EmailField(db_index=True, max_length=255)),
                ("name", models.CharField(blank=True, max_length=100)),
                ("current_step", models.PositiveSmallIntegerField(default=0)),
                ("plan_data", models.JSONField(blank=True, default=dict)),
                ("expires_at", models.DateTimeField(db_index=True)),
            ],
            options={
                "ordering": ["-updated_at"],
            },
        ),
        migrations.CreateModel(
            name="ProjectState",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("project_id", models.CharField(max_length=50, unique=True)),
                (
                    "mode",
                    models.CharField(
                        choices=[("easy", "Easy"), ("pro", "Pro"), ("quick", "Quick estimate")],
                        default="easy",
                        max_length=10,
                    ),
                ),
                ("data", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "ordering": ["-updated_at"],
            },
        ),
    ]
