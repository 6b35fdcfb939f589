"""Tests for reminder scheduling and delivery."""

from datetime import datetime, timedelta, timezone as dt_timezone
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, tag
from django_q.models import Schedule

from facility_planner.apps.core.test_utils import mock_json_response, mock_text_response
from facility_planner.apps.leads.emails import EmailDeliveryError
from facility_planner.apps.maintenance.engine import AssetSelection, generate_maintenance_plan
from facility_planner.apps.maintenance.models import MaintenanceReminder, SavedMaintenancePlan
from facility_planner.apps.maintenance.reminders import (
    ReminderPreferences,
    add_months,
    next_occurrence,
    next_send_at,
    reminder_recipients,
    save_plan_with_reminders,
    send_due_reminders,
)

# A Monday
NOW = datetime(2025, 3, 10, 10, 0, tzinfo=dt_timezone.utc)

SEND_EMAIL = "facility_planner.apps.maintenance.reminders.send_email"


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


@tag("maintenance")
class NextSendAtTests(SimpleTestCase):
    def test_daily(self):
        """Daily reminders go out today if the time is still ahead, else tomorrow."""
        self.assertEqual(next_send_at("daily", "monday", "11:00", NOW), utc(2025, 3, 10, 11, 0))
        self.assertEqual(next_send_at("daily", "monday", "09:00", NOW), utc(2025, 3, 11, 9, 0))

    def test_weekly(self):
        """Weekly reminders land on the preferred day."""
        self.assertEqual(next_send_at("weekly", "wednesday", "09:00", NOW), utc(2025, 3, 12, 9, 0))
        self.assertEqual(next_send_at("weekly", "monday", "09:00", NOW), utc(2025, 3, 17, 9, 0))

    def test_monthly(self):
        """Monthly reminders start on the first of the next month."""
        self.assertEqual(next_send_at("monthly", "monday", "09:00", NOW), utc(2025, 4, 1, 9, 0))

    def test_quarterly(self):
        """Quarterly reminders start at the next calendar quarter."""
        self.assertEqual(next_send_at("quarterly", "monday", "09:00", NOW), utc(2025, 4, 1, 9, 0))
        self.assertEqual(
            next_send_at("quarterly", "monday", "09:00", utc(2025, 5, 20, 8, 0)),
            utc(2025, 7, 1, 9, 0),
        )

    def test_annual(self):
        """Annual reminders start on January 1st."""
        self.assertEqual(next_send_at("annual", "monday", "09:00", NOW), utc(2026, 1, 1, 9, 0))

    def test_unknown_cadence(self):
        """Unknown cadences raise ValueError."""
        with self.assertRaises(ValueError):
            next_send_at("fortnightly", "monday", "09:00", NOW)

    def test_add_months_clamps_day(self):
        """Month arithmetic clamps to the last day of shorter months."""
        self.assertEqual(add_months(utc(2025, 1, 31), 1), utc(2025, 2, 28))
        self.assertEqual(add_months(utc(2025, 11, 15), 3), utc(2026, 2, 15))

    def test_next_occurrence(self):
        """Rescheduling advances by one period."""
        self.assertEqual(next_occurrence("weekly", NOW), NOW + timedelta(days=7))
        self.assertEqual(next_occurrence("annual", NOW), utc(2026, 3, 10, 10, 0))

    def test_recipients(self):
        """The owner comes first and non-addresses are dropped."""
        self.assertEqual(
            reminder_recipients("owner@example.com", [" ops@example.com ", "nobody"]),
            ["owner@example.com", "ops@example.com"],
        )


def save_plan(email="owner@example.com", enabled=True, cadences=("monthly", "quarterly")):
    plan = generate_maintenance_plan([AssetSelection("batting-cage-net")])
    return save_plan_with_reminders(
        email=email,
        plan_data=plan.to_dict(),
        preferences=ReminderPreferences(enabled=enabled, cadences=list(cadences)),
        facility_name="Diamond Dome",
        now=NOW,
    )


@tag("maintenance")
class SavePlanWithRemindersTests(TestCase):
    def test_creates_plan_and_reminders(self):
        """One reminder per chosen cadence is scheduled."""
        plan, reminders = save_plan()

        self.assertEqual(plan.plan_version, "2025.1")
        self.assertTrue(plan.reminders_active)
        self.assertEqual([r.cadence for r in reminders], ["monthly", "quarterly"])
        self.assertEqual(reminders[0].next_send_at, utc(2025, 4, 1, 9, 0))

    def test_resave_replaces_schedule(self):
        """Saving again for the same email updates the plan and deactivates old reminders."""
        first, _ = save_plan()
        second, reminders = save_plan(cadences=("annual",))

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(SavedMaintenancePlan.objects.count(), 1)
        self.assertEqual(
            list(MaintenanceReminder.objects.active().values_list("cadence", flat=True)), ["annual"]
        )
        self.assertEqual(MaintenanceReminder.objects.filter(is_active=False).count(), 2)

    def test_disabled_reminders(self):
        """With reminders off, nothing is scheduled."""
        plan, reminders = save_plan(enabled=False)

        self.assertEqual(reminders, [])
        self.assertFalse(plan.reminders_active)


@tag("maintenance")
class SendDueRemindersTests(TestCase):
    def setUp(self):
        self.plan, reminders = save_plan(cadences=("quarterly", "annual"))
        self.quarterly = reminders[0]

    @patch(SEND_EMAIL, return_value="msg_1")
    def test_sends_and_reschedules(self, mock_send):
        """Due reminders are emailed and moved forward one period."""
        sent = send_due_reminders(utc(2025, 4, 1, 9, 30))

        self.assertEqual(sent, 1)
        to, subject, html = mock_send.call_args.args
        self.assertEqual(to, ["owner@example.com"])
        self.assertEqual(subject, "Quarterly Maintenance Reminder - Diamond Dome")
        self.quarterly.refresh_from_db()
        self.assertEqual(self.quarterly.next_send_at, utc(2025, 7, 1, 9, 0))
        self.assertEqual(self.quarterly.last_sent_at, utc(2025, 4, 1, 9, 30))

    @patch(SEND_EMAIL)
    def test_nothing_due(self, mock_send):
        """Reminders in the future are not sent."""
        self.assertEqual(send_due_reminders(NOW), 0)
        mock_send.assert_not_called()

    @patch(SEND_EMAIL, side_effect=EmailDeliveryError("rejected"))
    def test_failure_leaves_reminder_due(self, mock_send):
        """A failed send is not rescheduled so it is retried next run."""
        sent = send_due_reminders(utc(2025, 4, 1, 9, 30))

        self.assertEqual(sent, 0)
        self.quarterly.refresh_from_db()
        self.assertEqual(self.quarterly.next_send_at, utc(2025, 4, 1, 9, 0))
        self.assertIsNone(self.quarterly.last_sent_at)

    @patch(SEND_EMAIL, return_value="msg_1")
    def test_skips_cadence_without_tasks(self, mock_send):
        """Reminders for a cadence with no tasks are not sent."""
        self.plan.plan_data["tasks"]["quarterly"] = []
        self.plan.save()

        self.assertEqual(send_due_reminders(utc(2025, 4, 1, 9, 30)), 0)
        mock_send.assert_not_called()


@tag("maintenance", "commands")
class SendMaintenanceRemindersCommandTests(TestCase):
    @patch("facility_planner.apps.maintenance.management.commands.send_maintenance_reminders.send_due_reminders", return_value=3)
    def test_sends_now(self, mock_send):
        """Without flags the command sends due reminders immediately."""
        out = StringIO()
        call_command("send_maintenance_reminders", stdout=out)

        self.assertIn("Sent 3 maintenance reminder(s)", out.getvalue())

    def test_schedule_is_registered_once(self):
        """--schedule creates an hourly schedule and updates it on rerun."""
        out = StringIO()
        call_command("send_maintenance_reminders", "--schedule", stdout=out)
        call_command("send_maintenance_reminders", "--schedule", stdout=out)

        schedule = Schedule.objects.get(name="Send maintenance reminders")
        self.assertEqual(schedule.schedule_type, Schedule.HOURLY)
        self.assertEqual(Schedule.objects.count(), 1)
        self.assertIn("Updated schedule", out.getvalue())


@tag("maintenance")
class ReminderDeliveryResilienceTests(TestCase):
    def setUp(self):
        save_plan(email="a@example.com", cadences=("quarterly",))
        save_plan(email="b@example.com", cadences=("quarterly",))
        self.due_at = utc(2025, 4, 1, 9, 30)

    @patch("facility_planner.apps.leads.emails.requests.post")
    def test_unreadable_resend_reply_still_counts_as_sent(self, mock_post):
        """An accepted message with a non-JSON reply is rescheduled and not sent again."""
        mock_post.side_effect = [
            mock_text_response("OK"),
            mock_json_response({"id": "msg_2"}),
        ]

        self.assertEqual(send_due_reminders(self.due_at), 2)
        self.assertEqual(send_due_reminders(self.due_at), 0)

        self.assertEqual(mock_post.call_count, 2)
        for reminder in MaintenanceReminder.objects.active():
            self.assertEqual(reminder.next_send_at, utc(2025, 7, 1, 9, 0))
            self.assertEqual(reminder.last_sent_at, self.due_at)

    @patch(SEND_EMAIL, side_effect=[RuntimeError("template blew up"), "msg_2"])
    def test_unexpected_error_does_not_stop_run(self, mock_send):
        """An unexpected failure on one reminder leaves it due and the rest still go out."""
        self.assertEqual(send_due_reminders(self.due_at), 1)

        reminders = MaintenanceReminder.objects.active()
        self.assertEqual(
            sorted(r.next_send_at for r in reminders),
            [utc(2025, 4, 1, 9, 0), utc(2025, 7, 1, 9, 0)],
        )
        self.assertEqual(reminders.filter(last_sent_at__isnull=True).count(), 1)
