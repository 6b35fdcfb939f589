"""Scrape vendor product pages and refresh live prices."""

from __future__ import annotations

from django.core.management.base import BaseCommand
from django_q.models import Schedule

from facility_planner.apps.pricing.sync import sync_pricing

TASK_PATH = "facility_planner.apps.pricing.tasks.run_price_sync"


class Command(BaseCommand):
    help = "Sync scraped prices for active products, or register the daily schedule."

    def add_arguments(self, parser):
        parser.add_argument(
            "cost_library_id",
            nargs="?",
            help="Sync only this cost library item",
        )
        parser.add_argument(
            "--schedule",
            action="store_true",
            help="Register a daily Django Q schedule instead of syncing now",
        )

    def handle(self, *args, **options):
        if options["schedule"]:
            schedule, created = Schedule.objects.update_or_create(
                name="Sync product pricing",
                defaults={
                    "func": TASK_PATH,
                    "schedule_type": Schedule.DAILY,
                    "repeats": -1,
                },
            )
            verb = "Created" if created else "Updated"
            self.stdout.write(self.style.SUCCESS(f"{verb} schedule '{schedule.name}'"))
            return

        result = sync_pricing(options["cost_library_id"])
        if result.get("message"):
            self.stdout.write(result["message"])
            return

        for detail in result["error_details"]:
            self.stdout.write(
                self.style.WARNING(f"{detail['cost_library_id']}: {detail['error']}")
            )
        self.stdout.write(
            self.style.SUCCESS(f"Synced {result['synced']} product(s), {result['errors']} error(s)")
        )
