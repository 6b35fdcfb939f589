"""Live price lookup with cost library fallback.

Active `ProductPricing` rows are held in a process-wide cache that is
reloaded when older than CACHE_TTL. Reloads replace the whole mapping, so
two requests refreshing at once just do the same work twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from django.utils import timezone

from facility_planner.apps.pricing.cost_library import DEFAULT_TIER, cost_by_tier, get_cost_item
from facility_planner.apps.pricing.models import ProductPricing, SyncStatus

logger = logging.getLogger(__name__)

CACHE_TTL = timedelta(minutes=5)


@dataclass(frozen=True)
class PriceResult:
    price: float
    is_live: bool
    tier: str
    last_synced: datetime | None = None
    is_override: bool = False

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "is_live": self.is_live,
            "tier": self.tier,
            "last_synced": self.last_synced.isoformat() if self.last_synced else None,
            "is_override": self.is_override,
        }


class PriceCache:
    """Active product mappings keyed by cost library id."""

    def __init__(self, ttl: timedelta = CACHE_TTL):
        self.ttl = ttl
        self._products: dict[str, ProductPricing] = {}
        self._loaded_at: datetime | None = None

    def is_stale(self, now: datetime | None = None) -> bool:
        if self._loaded_at is None:
            return True
        return (now or timezone.now()) - self._loaded_at > self.ttl

    def refresh(self) -> None:
        self._products = {p.cost_library_id: p for p in ProductPricing.objects.active()}
        self._loaded_at = timezone.now()
        logger.debug("Price cache refreshed", extra={"product_count": len(self._products)})

    def get(self, cost_library_id: str) -> ProductPricing | None:
        if self.is_stale():
            self.refresh()
        return self._products.get(cost_library_id)

    def invalidate(self) -> None:
        self._loaded_at = None


price_cache = PriceCache()


def invalidate_price_cache() -> None:
    price_cache.invalidate()


def get_live_price(cost_library_id: str, tier: str = DEFAULT_TIER) -> PriceResult:
    """Best available price for one cost library item.

    Order: a successfully scraped price, then the staff override for `tier`,
    then the static cost library tier, then zero.
    """
    product = price_cache.get(cost_library_id)

    if product is not None:
        if product.scraped_price and product.sync_status == SyncStatus.SUCCESS:
            return PriceResult(
                price=float(product.scraped_price),
                is_live=True,
                tier=tier,
                last_synced=product.last_synced_at,
            )
        override = product.fallback_override(tier)
        if override is not None:
            return PriceResult(price=float(override), is_live=False, tier=tier, is_override=True)

    item = get_cost_item(cost_library_id)
    if item is not None:
        return PriceResult(price=float(cost_by_tier(item, tier)), is_live=False, tier=tier)

    return PriceResult(price=0.0, is_live=False, tier=tier)


def _default_product_name(cost_library_id: str) -> str:
    item = get_cost_item(cost_library_id)
    return item.name if item else cost_library_id


def update_product_mapping(
    cost_library_id: str,
    product_url: str,
    product_name: str = "",
    vendor: str = "",
) -> ProductPricing:
    """Point a cost library item at a vendor page and queue it for the next sync."""
    product, _ = ProductPricing.objects.update_or_create(
        cost_library_id=cost_library_id,
        defaults={
            "product_url": product_url,
            "product_name": product_name or _default_product_name(cost_library_id),
            "vendor": vendor,
            "is_active": True,
            "sync_status": SyncStatus.PENDING,
        },
    )
    invalidate_price_cache()
    return product


def toggle_product_active(cost_library_id: str, is_active: bool) -> bool:
    """Returns False when no mapping exists for `cost_library_id`."""
    updated = ProductPricing.objects.filter(cost_library_id=cost_library_id).update(
        is_active=is_active
    )
    invalidate_price_cache()
    return bool(updated)


def update_fallback_prices(
    cost_library_id: str,
    low=None,
    mid=None,
    high=None,
) -> ProductPricing:
    """Set the per-tier override prices, creating the mapping if needed."""
    product, _ = ProductPricing.objects.update_or_create(
        cost_library_id=cost_library_id,
        defaults={
            "product_name": _default_product_name(cost_library_id),
            "fallback_override_low": low,
            "fallback_override_mid": mid,
            "fallback_override_high": high,
            "is_active": True,
        },
    )
    invalidate_price_cache()
    return product
