"""Firecrawl page scraping and price extraction."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

import requests
from django.conf import settings

FIRECRAWL_SCRAPE_URL = "https://api.firecrawl.dev/v1/scrape"

MAX_PLAUSIBLE_PRICE = Decimal("100000")

PRICE_PATTERNS = (
    re.compile(r"\$\s*([\d,]+(?:\.\d{2})?)"),
    re.compile(r"Price:\s*\$?([\d,]+(?:\.\d{2})?)", re.IGNORECASE),
    re.compile(r"Starting at\s*\$?([\d,]+(?:\.\d{2})?)", re.IGNORECASE),
)


class ScrapeError(Exception):
    """Firecrawl could not return page content."""


def scrape_markdown(url: str) -> str:
    """Fetch the main content of `url` as markdown.

    Raises ScrapeError when the key is missing, the request fails, or
    Firecrawl reports an unsuccessful scrape.
    """
    if not settings.FIRECRAWL_API_KEY:
        raise ScrapeError("FIRECRAWL_API_KEY is not configured")

    try:
        response = requests.post(
            FIRECRAWL_SCRAPE_URL,
            json={"url": url, "formats": ["markdown"], "onlyMainContent": True},
            headers={"Authorization": f"Bearer {settings.FIRECRAWL_API_KEY}"},
            timeout=60,
        )
        response.raise_for_status()
        body = response.json()
    except requests.RequestException as e:
        raise ScrapeError(str(e)) from e
    except ValueError as e:
        raise ScrapeError(f"Invalid response from Firecrawl: {e}") from e

    if not isinstance(body, dict):
        raise ScrapeError("Invalid response from Firecrawl")
    if not body.get("success"):
        raise ScrapeError(body.get("error") or "Scrape failed")
    data = body.get("data")
    markdown = data.get("markdown") if isinstance(data, dict) else None
    return markdown if isinstance(markdown, str) else ""


def _to_price(match: str) -> Decimal | None:
    digits = match.replace(",", "")
    try:
        return Decimal(digits)
    except InvalidOperation:
        return None


def extract_price(markdown: str) -> Decimal | None:
    """Lowest plausible dollar amount in the page text, or None."""
    prices = []
    for pattern in PRICE_PATTERNS:
        for match in pattern.findall(markdown):
            price = _to_price(match)
            if price is not None and 0 < price < MAX_PLAUSIBLE_PRICE:
                prices.append(price)
    return min(prices) if prices else None
