"""Tests for the lead capture endpoints."""

import uuid
from unittest.mock import patch

from django.core.cache import cache
from django.test import tag
from django.urls import reverse

from facility_planner.apps.core.test_utils import (
    JsonApiTestCase,
    create_lead,
    create_staff_user,
    create_user,
)
from facility_planner.apps.leads.models import Lead, WizardSubmission

ENQUEUE_FOLLOW_UP = "facility_planner.apps.leads.services.enqueue_lead_follow_up"
RETRY_LEAD_SYNC = "facility_planner.apps.leads.views.retry_lead_sync"


@tag("leads", "views")
@patch(ENQUEUE_FOLLOW_UP)
class LeadSubmitViewTests(JsonApiTestCase):
    def setUp(self):
        cache.clear()
        self.url = reverse("lead-submit")

    def test_creates_lead(self, mock_enqueue):
        """Valid submissions return 201 with the lead id."""
        response = self.post_json(
            self.url,
            {"name": "Jordan Smith", "email": "jordan@example.com", "source": "quick-estimate"},
            HTTP_USER_AGENT="pytest",
            HTTP_REFERER="https://sportsfacility.ai/estimate",
        )

        self.assertEqual(response.status_code, 201)
        data = response.json()
        lead = Lead.objects.get(pk=data["lead_id"])
        self.assertEqual(lead.source, "quick-estimate")
        self.assertEqual(lead.user_agent, "pytest")
        self.assertEqual(lead.referrer, "https://sportsfacility.ai/estimate")
        self.assertIsNone(data["report_id"])

    def test_report_link(self, mock_enqueue):
        """Wizard reports are stored and linked in the response."""
        response = self.post_json(
            self.url,
            {
                "name": "Jordan Smith",
                "email": "jordan@example.com",
                "report": {"selected_sports": ["baseball"], "business_model": "membership"},
                "facility_details": {"project_type": "Academy"},
            },
        )

        data = response.json()
        report = WizardSubmission.objects.get(pk=data["report_id"])
        self.assertEqual(report.business_model, "membership")
        self.assertEqual(data["report_url"], f"http://testserver/api/reports/{report.pk}/")
        self.assertEqual(mock_enqueue.call_args.args[1], {"project_type": "Academy"})

    def test_validation_errors(self, mock_enqueue):
        """Field errors are returned under details."""
        response = self.post_json(self.url, {"name": "J", "email": "nope"})

        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertEqual(data["error"], "Invalid lead data")
        self.assertEqual(set(data["details"]), {"name", "email"})

    def test_invalid_report(self, mock_enqueue):
        """A report with non-numeric figures returns 400 instead of failing the request."""
        response = self.post_json(
            self.url,
            {
                "name": "Jordan Smith",
                "email": "jordan@example.com",
                "report": {"monthly_opex": "about 5k"},
            },
        )

        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertEqual(data["error"], "Invalid report data")
        self.assertIn("monthly_opex", data["details"])
        self.assertFalse(Lead.objects.exists())

    def test_honeypot(self, mock_enqueue):
        """Bot submissions are rejected."""
        response = self.post_json(
            self.url, {"name": "Jordan Smith", "email": "j@example.com", "website": "spam"}
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Lead.objects.exists())

    def test_rate_limited(self, mock_enqueue):
        """The fourth submission in an hour gets 429 with a reset time."""
        payload = {"name": "Jordan Smith", "email": "jordan@example.com"}
        for _ in range(3):
            self.assertEqual(self.post_json(self.url, payload).status_code, 201)

        response = self.post_json(self.url, payload)

        self.assertEqual(response.status_code, 429)
        self.assertIn("reset_time", response.json())

    def test_get_not_allowed(self, mock_enqueue):
        """Only POST is accepted."""
        self.assertEqual(self.client.get(self.url).status_code, 405)


@tag("leads", "views")
class RetryLeadSyncViewTests(JsonApiTestCase):
    def setUp(self):
        self.lead = create_lead()
        self.url = reverse("lead-retry-sync", args=[self.lead.pk])

    def test_requires_login(self):
        """Anonymous callers get 401."""
        response = self.client.post(self.url)

        self.assertEqual(response.status_code, 401)

    def test_requires_staff(self):
        """Non-staff users get 403."""
        self.client.force_login(create_user())

        self.assertEqual(self.client.post(self.url).status_code, 403)

    @patch(RETRY_LEAD_SYNC, return_value={"status": "success", "message": "Lead synced"})
    def test_success(self, mock_retry):
        """Staff can retry a lead's sync."""
        self.client.force_login(create_staff_user())

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "message": "Lead synced"})
        mock_retry.assert_called_once_with(self.lead.pk)

    @patch(RETRY_LEAD_SYNC, return_value={"status": "error", "error": "quota exceeded"})
    def test_failure(self, mock_retry):
        """Sync failures surface as 502."""
        self.client.force_login(create_staff_user())

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["error"], "quota exceeded")

    def test_unknown_lead(self):
        """Missing leads are 404."""
        self.client.force_login(create_staff_user())

        response = self.client.post(reverse("lead-retry-sync", args=[999999]))

        self.assertEqual(response.status_code, 404)


@tag("leads", "views")
class WizardSubmissionDetailViewTests(JsonApiTestCase):
    def test_returns_report(self):
        """Reports are public by id."""
        report = WizardSubmission.objects.create(
            lead=create_lead(), facility_type="Academy", selected_sports=["baseball"]
        )

        response = self.client.get(reverse("wizard-submission-detail", args=[report.pk]))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["id"], str(report.pk))
        self.assertEqual(data["selected_sports"], ["baseball"])

    def test_unknown_report(self):
        """Unknown ids are 404."""
        response = self.client.get(reverse("wizard-submission-detail", args=[uuid.uuid4()]))

        self.assertEqual(response.status_code, 404)
