"""Shared test utilities, factories, and mixins.

This module provides common test data factories and mixins to reduce
code duplication across test files.

Usage:
    from facility_planner.apps.core.test_utils import create_lead

    class MyTestCase(TestCase):
        def setUp(self):
            self.lead = create_lead(source="b2b-contact")
"""

from __future__ import annotations

import json
import secrets
import uuid
from typing import TYPE_CHECKING, Any, cast
from unittest.mock import MagicMock

from django.contrib.auth import get_user_model
from django.test import TestCase

from facility_planner.apps.leads.models import Lead
from facility_planner.apps.pricing.models import ProductPricing

if TYPE_CHECKING:
    from django.contrib.auth.models import User

UserModel = cast("type[User]", get_user_model())


def _generate_test_password() -> str:
    """Generate a random password for test users."""
    return f"Test{secrets.token_hex(8)}!"


def _unique_suffix() -> str:
    """Return a short unique suffix for test data."""
    return uuid.uuid4().hex[:8]


# =============================================================================
# Factory Functions
# =============================================================================


def create_user(
    username: str | None = None,
    password: str | None = None,
    is_staff: bool = False,
    email: str | None = None,
    **kwargs,
) -> User:
    """Create a test user with sensible defaults.

    Args:
        username: Username (auto-generated if not provided)
        password: Password (auto-generated if not provided)
        is_staff: Whether user can reach the staff-only endpoints
        email: Email address (auto-generated if not provided)
        **kwargs: Additional fields passed to create_user

    Returns:
        Created User instance
    """
    if username is None:
        username = f"testuser-{_unique_suffix()}"
    if email is None:
        email = f"{username}@example.com"
    if password is None:
        password = _generate_test_password()
    return UserModel.objects.create_user(
        username=username,
        email=email,
        password=password,
        is_staff=is_staff,
        **kwargs,
    )


def create_staff_user(username: str | None = None, **kwargs) -> User:
    """Create a staff user."""
    return create_user(username=username, is_staff=True, **kwargs)


def create_lead(
    name: str = "Jordan Smith",
    email: str | None = None,
    source: str = "facility-wizard",
    **kwargs,
) -> Lead:
    """Create a lead with contact details filled in."""
    if email is None:
        email = f"lead-{_unique_suffix()}@example.com"
    defaults: dict[str, Any] = {
        "phone": "555-123-4567",
        "business_name": "Diamond Training Center",
        "city": "Austin",
        "state": "TX",
    }
    defaults.update(kwargs)
    return Lead.objects.create(name=name, email=email, source=source, **defaults)


def create_product_pricing(
    cost_library_id: str = "turf_installed",
    product_url: str = "https://vendor.example.com/turf",
    **kwargs,
) -> ProductPricing:
    """Create an active product mapping."""
    defaults: dict[str, Any] = {
        "product_name": cost_library_id.replace("_", " ").title(),
        "vendor": "Example Vendor",
        "is_active": True,
    }
    defaults.update(kwargs)
    return ProductPricing.objects.create(
        cost_library_id=cost_library_id, product_url=product_url, **defaults
    )


def mock_json_response(payload: dict | None = None, status_code: int = 200) -> MagicMock:
    """Build a stand-in for `requests.Response` with a JSON body."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = json.dumps(payload or {})
    response.raise_for_status.return_value = None
    return response


def mock_text_response(text: str, status_code: int = 200) -> MagicMock:
    """Build a stand-in for `requests.Response` whose body is not JSON."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    response.raise_for_status.return_value = None
    return response


# =============================================================================
# Test Mixins
# =============================================================================


class SuppressRequestLogsMixin:
    """Mixin to suppress Django request logging during tests.

    Use this for test classes that intentionally trigger 4xx/5xx responses
    (e.g., validation failures, rate limits, staff-only endpoints).

    The mixin suppresses django.request logs at the class level, so all
    tests in the class run quietly, but logs are restored afterward.
    """

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        import logging

        cls._request_logger = logging.getLogger("django.request")
        cls._original_level = cls._request_logger.level
        cls._request_logger.setLevel(logging.CRITICAL)

    @classmethod
    def tearDownClass(cls):
        cls._request_logger.setLevel(cls._original_level)
        super().tearDownClass()


class JsonApiTestCase(SuppressRequestLogsMixin, TestCase):
    """TestCase with a helper for posting JSON to the API endpoints."""

    def post_json(self, url: str, data: Any, **extra):
        return self.client.post(url, data=json.dumps(data), content_type="application/json", **extra)
