"""Sliding-window rate limiting for lead submissions.

Each client key maps to a list of submission timestamps kept in Django's
cache. A submission is allowed while fewer than the configured maximum fall
inside the rolling window.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_time: datetime | None = None


def _cache_key(client_key: str) -> str:
    return f"lead-rate:{client_key}"


def _window() -> timedelta:
    return timedelta(minutes=settings.RATE_LIMIT_WINDOW_MINUTES)


def _recent_timestamps(client_key: str, now: datetime) -> list[datetime]:
    cutoff = now - _window()
    return [ts for ts in cache.get(_cache_key(client_key), []) if ts > cutoff]


def check_rate_limit(client_key: str | None, now: datetime | None = None) -> RateLimitResult:
    """Report whether `client_key` may submit another lead.

    Clients that cannot be identified are never limited.
    """
    max_submissions = settings.RATE_LIMIT_LEADS_PER_WINDOW
    if not client_key or max_submissions <= 0:
        return RateLimitResult(allowed=True, remaining=max_submissions)

    now = now or timezone.now()
    recent = _recent_timestamps(client_key, now)
    if len(recent) >= max_submissions:
        return RateLimitResult(allowed=False, remaining=0, reset_time=min(recent) + _window())
    return RateLimitResult(allowed=True, remaining=max_submissions - len(recent) - 1)


def record_submission(client_key: str | None, now: datetime | None = None) -> None:
    """Prune expired timestamps for `client_key` and append `now`."""
    if not client_key:
        return
    now = now or timezone.now()
    recent = _recent_timestamps(client_key, now)
    recent.append(now)
    cache.set(_cache_key(client_key), recent, timeout=int(_window().total_seconds()))
