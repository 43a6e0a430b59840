"""Accumulate per-seller revenue, profit and product breakdowns from purchase records."""

import logging
import math

from sales_pipeline.errors import FieldTypeError, InvalidRecordError
from sales_pipeline.performance.index import Indices
from sales_pipeline.performance.models import Dataset, LineItem, PurchaseRecord, SellerStat
from sales_pipeline.performance.strategies import RevenueStrategy
from sales_pipeline.utils.transforms import is_number

logger = logging.getLogger(__name__)

type SellerStats = dict[str, SellerStat]


def _item_revenue(
    calculate_revenue: RevenueStrategy,
    purchase: PurchaseRecord,
    item: LineItem,
    location: str,
) -> float:
    """Revenue for one line item, asked of the strategy as a single-item purchase."""
    revenue = calculate_revenue(PurchaseRecord(seller_id=purchase.seller_id, items=(item,)))
    if not is_number(revenue):
        raise FieldTypeError(
            f"revenue strategy returned {revenue!r}, expected a finite number", location
        )
    return float(revenue)


def _seed_inactive_sellers(indices: Indices) -> SellerStats:
    return {
        seller_id: SellerStat(seller_id=seller_id, order=order)
        for order, seller_id in enumerate(indices.sellers)
    }


def aggregate_purchases(
    dataset: Dataset,
    indices: Indices,
    calculate_revenue: RevenueStrategy,
    include_inactive_sellers: bool = False,
) -> SellerStats:
    """Walk purchase records once and build a SellerStat per attributed seller.

    Stats are keyed by seller id in order of first appearance. A record whose
    seller is unknown is skipped entirely; an item whose sku is unknown is
    skipped, but its record still counts toward the seller's sales_count.
    """
    stats = _seed_inactive_sellers(indices) if include_inactive_sellers else {}
    skipped_records = 0
    skipped_items = 0

    for i, purchase in enumerate(dataset.purchase_records):
        if purchase.seller_id not in indices.sellers:
            logger.debug("purchase_records[%d]: unknown seller %r, skipping", i, purchase.seller_id)
            skipped_records += 1
            continue

        stat = stats.get(purchase.seller_id)
        if stat is None:
            stat = stats[purchase.seller_id] = SellerStat(seller_id=purchase.seller_id, order=len(stats))
        stat.sales_count += 1

        for j, item in enumerate(purchase.items):
            product = indices.products.get(item.sku)
            if product is None:
                logger.debug("purchase_records[%d].items[%d]: unknown sku %r, skipping", i, j, item.sku)
                skipped_items += 1
                continue

            revenue = _item_revenue(calculate_revenue, purchase, item, f"purchase_records[{i}].items[{j}]")
            cost = product.purchase_price * item.quantity
            stat.add_item(item.sku, item.quantity, revenue, revenue - cost)
            if not (math.isfinite(stat.revenue) and math.isfinite(stat.profit)):
                raise InvalidRecordError(
                    f"totals for seller '{purchase.seller_id}' overflow", f"purchase_records[{i}].items[{j}]"
                )

    if skipped_records or skipped_items:
        logger.info(
            "Skipped %d purchase records with unknown sellers and %d items with unknown skus",
            skipped_records, skipped_items,
        )
    return stats
