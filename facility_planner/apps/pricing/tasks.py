"""Price sync tasks using Django Q."""

from __future__ import annotations

from django_q.tasks import async_task

from facility_planner.logging import current_log_context, log_context


def enqueue_price_sync(cost_library_id: str | None = None) -> str:
    """Queue a price sync and return the Django Q task id."""
    return async_task(
        "facility_planner.apps.pricing.tasks.run_price_sync",
        cost_library_id,
        current_log_context(),
        timeout=600,
    )


def run_price_sync(cost_library_id: str | None = None, context: dict | None = None) -> dict:
    """Scrape and store prices for active products.

    This runs asynchronously via Django Q, either queued from the admin or
    from the daily schedule.
    """
    from facility_planner.apps.pricing.sync import sync_pricing

    with log_context(context, task="run_price_sync", cost_library_id=cost_library_id):
        return sync_pricing(cost_library_id)
