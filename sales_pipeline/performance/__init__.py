"""Seller performance report: validate, index, aggregate, then rank."""

import logging

from sales_pipeline.config import ReportConfig
from sales_pipeline.performance.aggregate import aggregate_purchases
from sales_pipeline.performance.index import build_indices
from sales_pipeline.performance.models import SellerReport
from sales_pipeline.performance.rank import build_seller_reports, rank_sellers
from sales_pipeline.performance.validate import validate_inputs

logger = logging.getLogger(__name__)


def analyze_sales_data(
    data: object,
    options: object,
    config: ReportConfig | None = None,
) -> list[SellerReport]:
    """Compute the ranked per-seller report for one dataset snapshot.

    ``data`` exposes ``sellers``, ``products`` and ``purchase_records``;
    ``options`` supplies ``calculate_revenue`` and ``calculate_bonus``.
    Any validation or strategy failure propagates and no report is returned.
    """
    config = config or ReportConfig()

    dataset, strategies = validate_inputs(data, options)
    indices = build_indices(dataset)
    stats = aggregate_purchases(
        dataset,
        indices,
        strategies.calculate_revenue,
        include_inactive_sellers=config.include_inactive_sellers,
    )
    ranked = rank_sellers(stats)
    reports = build_seller_reports(
        ranked,
        indices,
        strategies.calculate_bonus,
        top_n=config.top_n,
        mode=config.top_products_mode,
    )

    logger.info("Ranked %d sellers from %d purchase records", len(reports), len(dataset.purchase_records))
    return reports
