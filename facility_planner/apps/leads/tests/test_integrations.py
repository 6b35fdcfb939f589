"""Tests for the lead email, Google Sheets and webhook integrations."""

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import requests
from constance.test import override_config
from django.test import TestCase, override_settings, tag

from facility_planner.apps.core.test_utils import (
    create_lead,
    mock_json_response,
    mock_text_response,
)
from facility_planner.apps.leads.emails import (
    EmailDeliveryError,
    send_business_plan_resume_email,
    send_email,
    send_lead_emails,
)
from facility_planner.apps.leads.sheets import (
    SheetsSyncError,
    append_row,
    build_lead_row,
    reset_sync_state,
    sync_lead_to_sheets,
)
from facility_planner.apps.leads.webhooks import dispatch_lead, lead_payload, send_test_webhook

EMAIL_POST = "facility_planner.apps.leads.emails.requests.post"
WEBHOOK_POST = "facility_planner.apps.leads.webhooks.requests.post"
APPEND_ROW = "facility_planner.apps.leads.sheets.append_row"

WEBHOOK_URL = "https://hook.us1.make.com/abc123"


@tag("leads", "email")
class SendEmailTests(TestCase):
    @patch(EMAIL_POST, return_value=mock_json_response({"id": "msg_1"}))
    def test_posts_to_resend(self, mock_post):
        """Messages are posted with the API key and the message id returned."""
        message_id = send_email("a@example.com", "Hello", "<p>Hi</p>", reply_to="r@example.com")

        self.assertEqual(message_id, "msg_1")
        payload = mock_post.call_args.kwargs["json"]
        self.assertEqual(payload["to"], ["a@example.com"])
        self.assertEqual(payload["reply_to"], "r@example.com")
        self.assertEqual(mock_post.call_args.kwargs["headers"]["Authorization"], "Bearer re_test")

    @override_settings(RESEND_API_KEY="")
    def test_missing_api_key(self):
        """Without an API key nothing is sent."""
        with self.assertRaises(EmailDeliveryError):
            send_email("a@example.com", "Hello", "<p>Hi</p>")

    @patch(EMAIL_POST, return_value=mock_text_response("OK"))
    def test_unreadable_reply_is_not_a_failure(self, mock_post):
        """An accepted message with a non-JSON reply returns an empty id."""
        self.assertEqual(send_email("a@example.com", "Hello", "<p>Hi</p>"), "")

    @patch(EMAIL_POST, return_value=mock_json_response())
    def test_reply_without_id(self, mock_post):
        """A JSON reply that is not an object also returns an empty id."""
        mock_post.return_value.json.return_value = ["queued"]

        self.assertEqual(send_email("a@example.com", "Hello", "<p>Hi</p>"), "")

    @patch(EMAIL_POST, side_effect=requests.ConnectionError("down"))
    def test_request_failure(self, mock_post):
        """Transport errors become EmailDeliveryError."""
        with self.assertRaises(EmailDeliveryError):
            send_email("a@example.com", "Hello", "<p>Hi</p>")


@tag("leads", "email")
class SendLeadEmailsTests(TestCase):
    @override_config(COMPANY_NOTIFICATION_EMAILS="sales@example.com, ops@example.com")
    @patch(EMAIL_POST, return_value=mock_json_response({"id": "msg_1"}))
    def test_confirmation_and_notification(self, mock_post):
        """The customer and the company each get one message."""
        lead = create_lead(name="Jordan Smith", facility_type="Baseball Academy")

        result = send_lead_emails(lead, {"project_type": "Training Center"})

        self.assertEqual(result, {"customer_email_id": "msg_1", "company_email_id": "msg_1"})
        customer, company = (c.kwargs["json"] for c in mock_post.call_args_list)
        self.assertEqual(customer["to"], [lead.email])
        self.assertEqual(customer["subject"], "Thank you for your facility planning request")
        self.assertEqual(company["to"], ["sales@example.com", "ops@example.com"])
        self.assertEqual(company["subject"], "New Lead: Jordan Smith - Training Center")

    @patch(EMAIL_POST, return_value=mock_json_response({"id": "msg_1"}))
    def test_b2b_confirmation(self, mock_post):
        """Partnership inquiries get their own confirmation."""
        lead = create_lead(source="b2b-contact", partnership_type="Dealer")

        send_lead_emails(lead)

        customer = mock_post.call_args_list[0].kwargs["json"]
        self.assertEqual(customer["subject"], "Thank you for your partnership inquiry")

    @patch(EMAIL_POST)
    def test_notification_failure_is_tolerated(self, mock_post):
        """A failed company notification does not fail the customer email."""
        mock_post.side_effect = [mock_json_response({"id": "msg_1"}), requests.Timeout("slow")]

        result = send_lead_emails(create_lead())

        self.assertEqual(result, {"customer_email_id": "msg_1", "company_email_id": ""})

    @patch(EMAIL_POST, return_value=mock_json_response({"id": "msg_9"}))
    def test_resume_email(self, mock_post):
        """The resume email links back to the saved draft."""
        message_id = send_business_plan_resume_email(
            email="owner@example.com",
            name="Jordan",
            resume_url="http://testserver/business-plan?resume=abc",
            facility_name="Diamond Dome",
            current_step=3,
            total_steps=10,
            step_label="Market Analysis",
            expires_at=datetime(2025, 4, 9, tzinfo=dt_timezone.utc),
        )

        self.assertEqual(message_id, "msg_9")
        payload = mock_post.call_args.kwargs["json"]
        self.assertEqual(payload["subject"], "Continue Your Sports Facility Business Plan")
        self.assertIn("http://testserver/business-plan?resume=abc", payload["html"])


@tag("leads", "sheets")
class SheetsSyncTests(TestCase):
    def test_row_layout(self):
        """Rows span columns A through Q."""
        lead = create_lead(estimated_budget=Decimal("500000.00"), sports="baseball")
        timestamp = datetime(2025, 3, 10, tzinfo=dt_timezone.utc)

        row = build_lead_row(lead, "http://testserver/api/reports/x/", timestamp)

        self.assertEqual(len(row), 17)
        self.assertEqual(row[0], timestamp.isoformat())
        self.assertEqual(row[11], "500000.00")
        self.assertEqual(row[10], "")
        self.assertEqual(row[-1], "http://testserver/api/reports/x/")

    @patch(APPEND_ROW, return_value={"updates": {"updatedRows": 1}})
    def test_success_marks_lead_synced(self, mock_append):
        """A successful append is recorded on the lead."""
        lead = create_lead()

        self.assertTrue(sync_lead_to_sheets(lead))

        lead.refresh_from_db()
        self.assertTrue(lead.synced_to_google_sheets)
        self.assertEqual(lead.sync_error, "")
        self.assertIsNotNone(lead.sync_attempted_at)

    def test_missing_credentials_records_error(self):
        """Unconfigured credentials leave the lead unsynced with the reason."""
        lead = create_lead()

        self.assertFalse(sync_lead_to_sheets(lead))

        lead.refresh_from_db()
        self.assertFalse(lead.synced_to_google_sheets)
        self.assertEqual(lead.sync_error, "Google service account credentials not configured")

    @override_config(SHEETS_SYNC_ENABLED=False)
    @patch(APPEND_ROW)
    def test_disabled(self, mock_append):
        """Nothing is attempted while the sync is switched off."""
        self.assertFalse(sync_lead_to_sheets(create_lead()))
        mock_append.assert_not_called()

    @override_settings(GOOGLE_SHEET_ID="sheet-123", GOOGLE_SHEET_TAB="Leads")
    @patch("facility_planner.apps.leads.sheets.get_sheets_session")
    def test_append_row_request(self, mock_session):
        """Rows are appended as raw values to the configured tab."""
        session = MagicMock()
        session.post.return_value = mock_json_response({"updates": {}})
        mock_session.return_value = session

        append_row(["a", "b"])

        url = session.post.call_args.args[0]
        self.assertEqual(
            url,
            "https://sheets.googleapis.com/v4/spreadsheets/sheet-123/values/Leads!A:Q:append",
        )
        self.assertEqual(session.post.call_args.kwargs["json"], {"values": [["a", "b"]]})
        self.assertEqual(session.post.call_args.kwargs["params"], {"valueInputOption": "RAW"})

    @override_settings(GOOGLE_SHEET_ID="sheet-123")
    @patch("facility_planner.apps.leads.sheets.get_sheets_session")
    def test_unreadable_append_reply_still_syncs(self, mock_session):
        """A non-JSON reply to a successful append still marks the lead synced."""
        session = MagicMock()
        session.post.return_value = mock_text_response("<html>ok</html>")
        mock_session.return_value = session
        lead = create_lead()

        self.assertTrue(sync_lead_to_sheets(lead))

        lead.refresh_from_db()
        self.assertTrue(lead.synced_to_google_sheets)
        self.assertEqual(lead.sync_error, "")

    @override_settings(GOOGLE_SHEET_ID="sheet-123")
    @patch("facility_planner.apps.leads.sheets.get_sheets_session")
    def test_append_row_failure(self, mock_session):
        """HTTP errors become SheetsSyncError."""
        session = MagicMock()
        session.post.side_effect = requests.HTTPError("403 Forbidden")
        mock_session.return_value = session

        with self.assertRaises(SheetsSyncError):
            append_row(["a"])

    def test_reset_sync_state(self):
        """Resetting clears the previous outcome."""
        lead = create_lead(synced_to_google_sheets=True, sync_error="old")

        reset_sync_state(lead)

        lead.refresh_from_db()
        self.assertFalse(lead.synced_to_google_sheets)
        self.assertEqual(lead.sync_error, "")


@tag("leads", "webhooks")
class WebhookTests(TestCase):
    def test_payload(self):
        """The lead name is split and sports become a list."""
        lead = create_lead(name="Jordan Lee Smith", sports="baseball, softball")

        payload = lead_payload(lead)

        self.assertEqual(payload["first_name"], "Jordan")
        self.assertEqual(payload["last_name"], "Lee Smith")
        self.assertEqual(payload["sports"], ["baseball", "softball"])
        self.assertEqual(payload["referrer"], "Direct")
        self.assertIsNone(payload["total_investment"])

    @patch(WEBHOOK_POST)
    def test_disabled_by_default(self, mock_post):
        """The webhook is off until enabled in constance."""
        self.assertFalse(dispatch_lead({"email": "a@example.com"}))
        mock_post.assert_not_called()

    @override_config(MAKE_WEBHOOK_ENABLED=True, MAKE_WEBHOOK_URL=WEBHOOK_URL)
    @patch(WEBHOOK_POST, return_value=mock_json_response())
    def test_dispatch(self, mock_post):
        """Enabled webhooks receive the payload plus a timestamp."""
        self.assertTrue(dispatch_lead({"email": "a@example.com"}))

        self.assertEqual(mock_post.call_args.args[0], WEBHOOK_URL)
        body = mock_post.call_args.kwargs["json"]
        self.assertEqual(body["email"], "a@example.com")
        self.assertIn("timestamp", body)

    @override_config(MAKE_WEBHOOK_ENABLED=True, MAKE_WEBHOOK_URL=WEBHOOK_URL)
    @patch(WEBHOOK_POST, side_effect=requests.ConnectionError("refused"))
    def test_dispatch_failure(self, mock_post):
        """Delivery failures are reported as False."""
        self.assertFalse(dispatch_lead({"email": "a@example.com"}))

    @override_config(MAKE_WEBHOOK_ENABLED=True, MAKE_WEBHOOK_URL=WEBHOOK_URL)
    @patch(WEBHOOK_POST, return_value=mock_json_response())
    def test_send_test_webhook(self, mock_post):
        """The admin test sends the sample lead."""
        result = send_test_webhook()

        self.assertEqual(result["status"], "success")
        self.assertEqual(mock_post.call_args.kwargs["json"]["email"], "test@example.com")

    def test_send_test_webhook_disabled(self):
        """The admin test explains when the webhook is off."""
        self.assertEqual(send_test_webhook()["status"], "error")
