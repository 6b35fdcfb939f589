"""Google Sheets sync for captured leads.

Each lead becomes one appended row (columns A through Q) in the configured
sheet tab, authenticated with a service account.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

import requests
from constance import config
from django.conf import settings
from django.utils import timezone
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

if TYPE_CHECKING:
    from facility_planner.apps.leads.models import Lead

logger = logging.getLogger(__name__)

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
APPEND_URL = "https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{range}:append"
SHEET_COLUMNS = "A:Q"


class SheetsSyncError(Exception):
    """The row could not be appended to the lead sheet."""


def _cell(value) -> str:
    return "" if value is None else str(value)


def build_lead_row(lead: Lead, report_url: str = "", timestamp: datetime | None = None) -> list[str]:
    """Row layout: timestamp, contact, facility, estimates, source, report link."""
    timestamp = timestamp or timezone.now()
    return [
        timestamp.isoformat(),
        lead.name,
        lead.email,
        lead.phone,
        lead.business_name,
        lead.city,
        lead.state,
        lead.facility_type,
        lead.facility_size,
        lead.sports,
        _cell(lead.estimated_square_footage),
        _cell(lead.estimated_budget),
        _cell(lead.estimated_monthly_revenue),
        _cell(lead.estimated_roi),
        _cell(lead.break_even_months),
        lead.source,
        report_url,
    ]


def get_sheets_session() -> AuthorizedSession:
    """Requests session that signs calls with the service account."""
    if not settings.GOOGLE_SERVICE_ACCOUNT_JSON:
        raise SheetsSyncError("Google service account credentials not configured")
    if not settings.GOOGLE_SHEET_ID:
        raise SheetsSyncError("GOOGLE_SHEET_ID is not configured")
    try:
        info = json.loads(settings.GOOGLE_SERVICE_ACCOUNT_JSON)
        credentials = service_account.Credentials.from_service_account_info(
            info, scopes=[SHEETS_SCOPE]
        )
    except (ValueError, KeyError) as e:
        raise SheetsSyncError(f"Invalid service account credentials: {e}") from e
    return AuthorizedSession(credentials)


def append_row(row: list[str]) -> dict:
    """Append one row to the lead sheet and return the API response body."""
    session = get_sheets_session()
    url = APPEND_URL.format(
        sheet_id=settings.GOOGLE_SHEET_ID,
        range=quote(f"{settings.GOOGLE_SHEET_TAB}!{SHEET_COLUMNS}", safe="!:"),
    )
    try:
        response = session.post(
            url,
            params={"valueInputOption": "RAW"},
            json={"values": [row]},
            timeout=10,
        )
        response.raise_for_status()
    except (requests.RequestException, GoogleAuthError) as e:
        raise SheetsSyncError(f"Failed to append to sheet: {e}") from e

    try:
        body = response.json()
    except ValueError:
        logger.warning("Sheets append succeeded but returned a non-JSON body")
        return {}
    return body if isinstance(body, dict) else {}


def sync_lead_to_sheets(lead: Lead) -> bool:
    """Append `lead` to the sheet and record the outcome on the lead.

    Returns True on success. Failures are stored in `lead.sync_error`.
    """
    if not config.SHEETS_SYNC_ENABLED:
        return False

    now = timezone.now()
    try:
        append_row(build_lead_row(lead, report_url=lead.report_url, timestamp=now))
    except SheetsSyncError as e:
        logger.warning("Google Sheets sync failed for lead %s: %s", lead.pk, str(e))
        lead.synced_to_google_sheets = False
        lead.sync_error = str(e)
        lead.sync_attempted_at = now
        lead.save(update_fields=["synced_to_google_sheets", "sync_error", "sync_attempted_at"])
        return False

    lead.synced_to_google_sheets = True
    lead.sync_error = ""
    lead.sync_attempted_at = now
    lead.save(update_fields=["synced_to_google_sheets", "sync_error", "sync_attempted_at"])
    logger.info("Lead synced to Google Sheets", extra={"lead_id": lead.pk})
    return True


def reset_sync_state(lead: Lead) -> None:
    """Clear a previous sync result before retrying."""
    lead.synced_to_google_sheets = False
    lead.sync_error = ""
    lead.sync_attempted_at = timezone.now()
    lead.save(update_fields=["synced_to_google_sheets", "sync_error", "sync_attempted_at"])
