"""Send due maintenance reminder emails."""

from __future__ import annotations

from django.core.management.base import BaseCommand
from django_q.models import Schedule

from facility_planner.apps.maintenance.reminders import send_due_reminders

TASK_PATH = "facility_planner.apps.maintenance.tasks.send_maintenance_reminders"


class Command(BaseCommand):
    help = "Email every active reminder that is due, or register the hourly schedule."

    def add_arguments(self, parser):
        parser.add_argument(
            "--schedule",
            action="store_true",
            help="Register an hourly Django Q schedule instead of sending now",
        )

    def handle(self, *args, **options):
        if options["schedule"]:
            schedule, created = Schedule.objects.update_or_create(
                name="Send maintenance reminders",
                defaults={
                    "func": TASK_PATH,
                    "schedule_type": Schedule.HOURLY,
                    "repeats": -1,
                },
            )
            verb = "Created" if created else "Updated"
            self.stdout.write(self.style.SUCCESS(f"{verb} schedule '{schedule.name}'"))
            return

        sent = send_due_reminders()
        self.stdout.write(self.style.SUCCESS(f"Sent {sent} maintenance reminder(s)"))
