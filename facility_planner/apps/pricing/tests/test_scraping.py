"""Tests for Firecrawl scraping and price extraction."""

from decimal import Decimal
from unittest.mock import patch

import requests
from django.test import SimpleTestCase, override_settings, tag

from facility_planner.apps.core.test_utils import mock_json_response, mock_text_response
from facility_planner.apps.pricing.scraping import ScrapeError, extract_price, scrape_markdown


@tag("pricing")
class ExtractPriceTests(SimpleTestCase):
    def test_returns_lowest_price(self):
        """The lowest dollar amount on the page is taken as the base price."""
        markdown = "Pro model $1,299.99\nBasic model $849.00\nShipping $49"
        self.assertEqual(extract_price(markdown), Decimal("49"))

    def test_price_label_without_dollar_sign(self):
        """`Price: 1234` is recognized without a currency symbol."""
        self.assertEqual(extract_price("Price: 1234"), Decimal("1234"))

    def test_starting_at_label(self):
        """`Starting at` prices are recognized."""
        self.assertEqual(extract_price("Starting at 2,450.50 per lane"), Decimal("2450.50"))

    def test_ignores_implausible_amounts(self):
        """Zero and six-figure amounts are discarded."""
        self.assertEqual(extract_price("$0.00 down, $150,000 building, $450"), Decimal("450"))

    def test_no_price(self):
        """Pages without dollar amounts return None."""
        self.assertIsNone(extract_price("Contact us for a quote"))


@tag("pricing")
class ScrapeMarkdownTests(SimpleTestCase):
    @patch("facility_planner.apps.pricing.scraping.requests.post")
    def test_returns_markdown(self, mock_post):
        """The markdown body of a successful scrape is returned."""
        mock_post.return_value = mock_json_response(
            {"success": True, "data": {"markdown": "# Net\n$280"}}
        )

        self.assertEqual(scrape_markdown("https://vendor.example.com/net"), "# Net\n$280")
        body = mock_post.call_args.kwargs["json"]
        self.assertEqual(body["formats"], ["markdown"])
        self.assertTrue(body["onlyMainContent"])

    @patch("facility_planner.apps.pricing.scraping.requests.post")
    def test_unsuccessful_scrape_raises(self, mock_post):
        """A `success: false` body raises ScrapeError."""
        mock_post.return_value = mock_json_response({"success": False})

        with self.assertRaisesMessage(ScrapeError, "Scrape failed"):
            scrape_markdown("https://vendor.example.com/net")

    @patch("facility_planner.apps.pricing.scraping.requests.post")
    def test_request_failure_raises(self, mock_post):
        """Network errors surface as ScrapeError."""
        mock_post.side_effect = requests.ConnectionError("timed out")

        with self.assertRaisesMessage(ScrapeError, "timed out"):
            scrape_markdown("https://vendor.example.com/net")

    @override_settings(FIRECRAWL_API_KEY="")
    def test_missing_api_key_raises(self):
        """Scraping without a key fails before any request is made."""
        with self.assertRaisesMessage(ScrapeError, "FIRECRAWL_API_KEY"):
            scrape_markdown("https://vendor.example.com/net")

    @patch("facility_planner.apps.pricing.scraping.requests.post")
    def test_non_json_body_raises(self, mock_post):
        """A 200 response that is not JSON surfaces as ScrapeError."""
        mock_post.return_value = mock_text_response("<html>gateway</html>")

        with self.assertRaisesMessage(ScrapeError, "Invalid response from Firecrawl"):
            scrape_markdown("https://vendor.example.com/net")

    @patch("facility_planner.apps.pricing.scraping.requests.post")
    def test_non_object_body_raises(self, mock_post):
        """A JSON body that is not an object surfaces as ScrapeError."""
        mock_post.return_value = mock_json_response()
        mock_post.return_value.json.return_value = ["unexpected"]

        with self.assertRaisesMessage(ScrapeError, "Invalid response from Firecrawl"):
            scrape_markdown("https://vendor.example.com/net")

    @patch("facility_planner.apps.pricing.scraping.requests.post")
    def test_missing_markdown_is_empty(self, mock_post):
        """A successful scrape without page data yields empty text."""
        mock_post.return_value = mock_json_response({"success": True, "data": None})

        self.assertEqual(scrape_markdown("https://vendor.example.com/net"), "")
