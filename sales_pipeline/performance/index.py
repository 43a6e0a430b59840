"""Lookup tables used to join purchase records against sellers and products."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sales_pipeline.performance.models import Dataset, Product, Seller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Indices:
    sellers: dict[str, Seller]
    products: dict[str, Product]


def _index_by[T](records: Iterable[T], key: str, label: str) -> dict[str, T]:
    """Map key -> record; on duplicate keys the later record replaces the earlier one."""
    index: dict[str, T] = {}
    for record in records:
        value = getattr(record, key)
        if value in index:
            logger.debug("Duplicate %s %r, keeping the later entry", label, value)
        index[value] = record
    return index


def build_indices(dataset: Dataset) -> Indices:
    return Indices(
        sellers=_index_by(dataset.sellers, "id", "seller id"),
        products=_index_by(dataset.products, "sku", "sku"),
    )
