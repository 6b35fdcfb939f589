"""Refresh scraped prices for active product mappings."""

from __future__ import annotations

import logging

from django.utils import timezone

from facility_planner.apps.pricing.models import ProductPricing, SyncStatus
from facility_planner.apps.pricing.scraping import ScrapeError, extract_price, scrape_markdown
from facility_planner.apps.pricing.services import invalidate_price_cache

logger = logging.getLogger(__name__)

NO_PRICE_ERROR = "Could not extract price from page"


def _record(product: ProductPricing, status: str, error: str = "", price=None) -> None:
    product.sync_status = status
    product.sync_error = error
    product.last_synced_at = timezone.now()
    fields = ["sync_status", "sync_error", "last_synced_at", "updated_at"]
    if price is not None:
        product.scraped_price = price
        fields.append("scraped_price")
    product.save(update_fields=fields)


def sync_pricing(cost_library_id: str | None = None) -> dict:
    """Scrape each active product page and store the extracted price.

    Products are processed one at a time. A product that fails to scrape or
    has no recognizable price is recorded as such and the batch continues.
    """
    products = ProductPricing.objects.active()
    if cost_library_id:
        products = products.filter(cost_library_id=cost_library_id)
    products = list(products)

    if not products:
        return {"success": True, "message": "No products to sync", "synced": 0, "errors": 0}

    logger.info("Price sync started", extra={"product_count": len(products)})
    results: list[dict] = []
    error_details: list[dict] = []

    for product in products:
        try:
            price = extract_price(scrape_markdown(product.product_url))
        except ScrapeError as e:
            logger.warning("Price scrape failed for %s: %s", product.cost_library_id, str(e))
            _record(product, SyncStatus.ERROR, str(e))
            error_details.append({"cost_library_id": product.cost_library_id, "error": str(e)})
            continue
        except Exception as e:
            logger.exception("Price sync failed for %s", product.cost_library_id)
            message = str(e) or e.__class__.__name__
            _record(product, SyncStatus.ERROR, message)
            error_details.append({"cost_library_id": product.cost_library_id, "error": message})
            continue

        if price is None:
            _record(product, SyncStatus.NO_PRICE_FOUND, NO_PRICE_ERROR)
            error_details.append(
                {"cost_library_id": product.cost_library_id, "error": "No prices found on page"}
            )
            continue

        _record(product, SyncStatus.SUCCESS, price=price)
        results.append(
            {"cost_library_id": product.cost_library_id, "price": float(price), "status": "success"}
        )

    invalidate_price_cache()
    logger.info(
        "Price sync completed",
        extra={"synced": len(results), "errors": len(error_details)},
    )
    return {
        "success": True,
        "synced": len(results),
        "errors": len(error_details),
        "results": results,
        "error_details": error_details,
    }
