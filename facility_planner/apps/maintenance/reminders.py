"""Reminder scheduling and delivery for saved maintenance plans."""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta

from django.conf import settings
from django.db import transaction
from django.template.loader import render_to_string
from django.utils import timezone

from facility_planner.apps.leads.emails import EmailDeliveryError, send_email
from facility_planner.apps.maintenance.models import (
    Cadence,
    MaintenanceReminder,
    SavedMaintenancePlan,
)

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_REMINDER_CADENCES = (Cadence.MONTHLY, Cadence.QUARTERLY, Cadence.ANNUAL)


@dataclass
class ReminderPreferences:
    enabled: bool = False
    cadences: list[str] = field(default_factory=lambda: list(DEFAULT_REMINDER_CADENCES))
    preferred_day: str = "monday"
    preferred_time: str = "09:00"
    additional_recipients: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "cadences": list(self.cadences),
            "preferred_day": self.preferred_day,
            "preferred_time": self.preferred_time,
            "additional_recipients": list(self.additional_recipients),
        }


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _parse_time(preferred_time: str) -> time:
    hours, minutes = (int(part) for part in preferred_time.split(":", 1))
    return time(hours, minutes)


def next_send_at(
    cadence: str,
    preferred_day: str,
    preferred_time: str,
    now: datetime | None = None,
) -> datetime:
    """First send time for a newly created reminder.

    Weekly reminders land on `preferred_day`; the other cadences ignore it.
    """
    now = timezone.localtime(now or timezone.now())
    at = _parse_time(preferred_time)
    target = now.replace(hour=at.hour, minute=at.minute, second=0, microsecond=0)

    if cadence == Cadence.DAILY:
        if target <= now:
            target += timedelta(days=1)
    elif cadence == Cadence.WEEKLY:
        diff = WEEKDAYS.index(preferred_day.lower()) - target.weekday()
        if diff < 0 or (diff == 0 and target <= now):
            diff += 7
        target += timedelta(days=diff)
    elif cadence == Cadence.MONTHLY:
        target = target.replace(day=1)
        if target <= now:
            target = add_months(target, 1)
    elif cadence == Cadence.QUARTERLY:
        # First day of the next calendar quarter
        target = target.replace(day=1)
        target = add_months(target, 3 - (now.month - 1) % 3)
        if target <= now:
            target = add_months(target, 3)
    elif cadence == Cadence.ANNUAL:
        target = target.replace(month=1, day=1)
        if target <= now:
            target = target.replace(year=target.year + 1)
    else:
        raise ValueError(f"Unknown cadence: {cadence}")
    return target


def next_occurrence(cadence: str, current: datetime) -> datetime:
    """Advance a send time by one period of `cadence`."""
    if cadence == Cadence.DAILY:
        return current + timedelta(days=1)
    if cadence == Cadence.WEEKLY:
        return current + timedelta(days=7)
    if cadence == Cadence.MONTHLY:
        return add_months(current, 1)
    if cadence == Cadence.QUARTERLY:
        return add_months(current, 3)
    if cadence == Cadence.ANNUAL:
        return add_months(current, 12)
    raise ValueError(f"Unknown cadence: {cadence}")


def reminder_recipients(email: str, additional: Iterable[str]) -> list[str]:
    """The owner first, then any extra addresses that look like emails."""
    extras = [addr.strip() for addr in additional if "@" in addr]
    return [email, *extras]


@transaction.atomic
def save_plan_with_reminders(
    *,
    email: str,
    plan_data: dict,
    preferences: ReminderPreferences,
    name: str = "",
    facility_name: str = "",
    location_city: str = "",
    location_state: str = "",
    location_zip: str = "",
    sports: list[str] | None = None,
    selected_assets: list[dict] | None = None,
    now: datetime | None = None,
) -> tuple[SavedMaintenancePlan, list[MaintenanceReminder]]:
    """Store the plan for `email` and replace its reminder schedule.

    Existing reminders are deactivated rather than deleted so their send
    history stays visible in the admin.
    """
    recipients = reminder_recipients(email, preferences.additional_recipients)
    preferences.additional_recipients = recipients[1:]

    plan, created = SavedMaintenancePlan.objects.update_or_create(
        email=email,
        defaults={
            "name": name,
            "facility_name": facility_name,
            "location_city": location_city,
            "location_state": location_state,
            "location_zip": location_zip,
            "sports": sports or [],
            "selected_assets": selected_assets or [],
            "plan_data": plan_data,
            "plan_version": plan_data.get("version", ""),
            "reminder_preferences": preferences.to_dict(),
            "reminders_active": preferences.enabled,
        },
    )
    plan.reminders.active().update(is_active=False)

    reminders: list[MaintenanceReminder] = []
    if preferences.enabled:
        reminders = MaintenanceReminder.objects.bulk_create(
            MaintenanceReminder(
                plan=plan,
                cadence=cadence,
                recipients=recipients,
                next_send_at=next_send_at(
                    cadence, preferences.preferred_day, preferences.preferred_time, now
                ),
            )
            for cadence in preferences.cadences
        )

    logger.info(
        "Maintenance plan saved",
        extra={
            "plan_id": plan.pk,
            "created": created,
            "reminder_count": len(reminders),
        },
    )
    return plan, reminders


def render_reminder_email(reminder: MaintenanceReminder, tasks: list[dict]) -> tuple[str, str]:
    """Return (subject, html) for one reminder."""
    plan = reminder.plan
    cadence_label = reminder.get_cadence_display()
    subject = (
        f"{cadence_label} Maintenance Reminder - "
        f"{plan.facility_name or plan.name or 'Your Facility'}"
    )
    html = render_to_string(
        "maintenance/emails/reminder.html",
        {
            "plan": plan,
            "cadence_label": cadence_label,
            "tasks": tasks,
        },
    )
    return subject, html


def send_due_reminders(now: datetime | None = None) -> int:
    """Email every due reminder and reschedule it. Returns the number sent.

    Reminders whose plan has no tasks for the cadence are left untouched. A
    delivery failure is logged and the remaining reminders still go out.
    """
    now = now or timezone.now()
    sent = 0
    due = MaintenanceReminder.objects.due(now).select_related("plan")
    for reminder in due:
        tasks = reminder.plan.tasks_for(reminder.cadence)
        if not tasks:
            continue

        try:
            subject, html = render_reminder_email(reminder, tasks)
            send_email(
                reminder.recipients,
                subject,
                html,
                from_email=settings.EMAIL_FROM_REMINDERS,
            )
        except EmailDeliveryError as e:
            logger.warning(
                "Reminder %s delivery failed: %s",
                reminder.pk,
                str(e),
            )
            continue
        except Exception:
            logger.exception("Reminder %s could not be sent", reminder.pk)
            continue

        reminder.next_send_at = next_occurrence(reminder.cadence, reminder.next_send_at)
        reminder.last_sent_at = now
        reminder.save(update_fields=["next_send_at", "last_sent_at", "updated_at"])
        sent += 1

    logger.info("Maintenance reminders processed", extra={"sent": sent})
    return sent
