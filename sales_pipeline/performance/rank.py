"""Rank sellers by profit, assign bonuses and pick each seller's top products."""

import logging
from collections.abc import Mapping

import pandas as pd

from sales_pipeline.config import TOP_PRODUCT_MODES
from sales_pipeline.errors import FieldTypeError
from sales_pipeline.performance.index import Indices
from sales_pipeline.performance.models import (
    Product,
    SellerReport,
    SellerStat,
    SellerWithProfit,
    TopProduct,
)
from sales_pipeline.performance.strategies import BonusStrategy
from sales_pipeline.utils.transforms import is_number, round_money

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown"


def rank_sellers(stats: Mapping[str, SellerStat]) -> list[SellerStat]:
    """Order stats by profit, highest first.

    Equal profits keep the order in which the sellers first appeared.
    """
    if not stats:
        return []

    frame = pd.DataFrame({
        "seller_id": list(stats),
        "profit": [s.profit for s in stats.values()],
        "order": [s.order for s in stats.values()],
    })
    ranked = frame.sort_values(["profit", "order"], ascending=[False, True])
    return [stats[seller_id] for seller_id in ranked["seller_id"]]


def assign_bonuses(
    ranked: list[SellerStat],
    indices: Indices,
    calculate_bonus: BonusStrategy,
) -> list[float]:
    """Call the bonus strategy once per seller, in rank order."""
    total = len(ranked)
    if total == 0:
        return []

    bonuses = []
    for index, stat in enumerate(ranked):
        seller = SellerWithProfit.from_seller(indices.sellers[stat.seller_id], stat.profit)
        bonus = calculate_bonus(index, total, seller)
        if not is_number(bonus):
            raise FieldTypeError(
                f"bonus strategy returned {type(bonus).__name__}, expected a number",
                f"rank {index}",
            )
        bonuses.append(round_money(bonus))
    return bonuses


def top_products(
    stat: SellerStat,
    products: Mapping[str, Product],
    top_n: int = 3,
    mode: str = "profit",
) -> list[TopProduct]:
    """The seller's best products, truncated to top_n.

    mode="profit" sorts by profit, then quantity sold, and reports
    {sku, name, count, profit}; mode="quantity" sorts by quantity sold and
    reports {sku, quantity}. Remaining ties keep first-sale order.
    """
    if mode not in TOP_PRODUCT_MODES:
        raise ValueError(f"Unknown top products mode: {mode}")
    if not stat.products:
        return []

    frame = pd.DataFrame([
        {"sku": sku, "quantity": p.count, "profit": p.profit, "order": p.order}
        for sku, p in stat.products.items()
    ])

    match mode:
        case "profit":
            ranked = frame.sort_values(["profit", "quantity", "order"], ascending=[False, False, True])
            return [
                {
                    "sku": row.sku,
                    "name": products[row.sku].name if row.sku in products else UNKNOWN_PRODUCT_NAME,
                    "count": int(row.quantity),
                    "profit": round_money(row.profit),
                }
                for row in ranked.head(top_n).itertuples(index=False)
            ]
        case "quantity":
            ranked = frame.sort_values(["quantity", "order"], ascending=[False, True])
            return [
                {"sku": row.sku, "quantity": int(row.quantity)}
                for row in ranked.head(top_n).itertuples(index=False)
            ]


def build_seller_reports(
    ranked: list[SellerStat],
    indices: Indices,
    calculate_bonus: BonusStrategy,
    top_n: int = 3,
    mode: str = "profit",
) -> list[SellerReport]:
    bonuses = assign_bonuses(ranked, indices, calculate_bonus)

    reports = []
    for stat, bonus in zip(ranked, bonuses, strict=True):
        reports.append(SellerReport(
            seller_id=stat.seller_id,
            name=indices.sellers[stat.seller_id].full_name,
            revenue=round_money(stat.revenue),
            profit=round_money(stat.profit),
            sales_count=stat.sales_count,
            bonus=bonus,
            top_products=tuple(top_products(stat, indices.products, top_n, mode)),
        ))

    logger.debug("Built %d seller reports", len(reports))
    return reports
