"""Report on the Django Q worker and the jobs it owns."""

from __future__ import annotations

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db.models import Count
from django.utils import timezone
from django_q.models import Failure, OrmQ, Success

from facility_planner.apps.leads.models import Lead
from facility_planner.apps.maintenance.models import MaintenanceReminder

STUCK_QUEUE_AGE = timedelta(minutes=10)
OVERDUE_REMINDER_AGE = timedelta(hours=2)
UNSYNCED_LEAD_AGE = timedelta(hours=1)


class Command(BaseCommand):
    help = "Check Django Q worker health, queue depth, and overdue background work"

    def handle(self, *args, **options):
        self.now = timezone.now()
        self._task_outcomes()
        self._queue_status()
        self._overdue_reminders()
        self._unsynced_leads()

    def _task_outcomes(self):
        since = self.now - timedelta(hours=24)
        succeeded = Success.objects.filter(stopped__gte=since).count()
        self.stdout.write(f"Successful tasks (24h): {succeeded}")

        failures = (
            Failure.objects.filter(stopped__gte=since)
            .values("func")
            .annotate(count=Count("id"))
            .order_by("-count")
        )
        if not failures:
            self.stdout.write(self.style.SUCCESS("No failed tasks (24h)"))
            return
        for row in failures:
            self.stdout.write(self.style.WARNING(f"Failed (24h): {row['func']} x{row['count']}"))
        latest = Failure.objects.order_by("-stopped").first()
        self.stdout.write(f"Latest error: {latest.result}")

    def _queue_status(self):
        queued = OrmQ.objects.count()
        if not queued:
            self.stdout.write(self.style.SUCCESS("Queue is empty"))
            return
        self.stdout.write(f"Tasks in queue: {queued}")
        oldest = OrmQ.objects.order_by("lock").first()
        if oldest and oldest.lock:
            age = self.now - oldest.lock
            if age > STUCK_QUEUE_AGE:
                minutes = age.total_seconds() / 60
                self.stdout.write(
                    self.style.ERROR(f"Oldest queued task is {minutes:.1f} minutes old; worker may be down")
                )

    def _overdue_reminders(self):
        overdue = MaintenanceReminder.objects.due(self.now - OVERDUE_REMINDER_AGE).count()
        if overdue:
            self.stdout.write(
                self.style.ERROR(
                    f"{overdue} maintenance reminder(s) overdue; is the reminder schedule registered?"
                )
            )
        else:
            self.stdout.write(self.style.SUCCESS("No overdue maintenance reminders"))

    def _unsynced_leads(self):
        errored = Lead.objects.with_sync_errors().filter(
            created_at__lt=self.now - UNSYNCED_LEAD_AGE
        ).count()
        if errored:
            self.stdout.write(
                self.style.WARNING(f"{errored} lead(s) failed Google Sheets sync; retry from the admin")
            )
        else:
            self.stdout.write(self.style.SUCCESS("No leads with Google Sheets sync errors"))
