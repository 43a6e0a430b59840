"""Revenue and bonus calculation strategies.

The aggregator and ranker never compute revenue or bonuses themselves; they
call whichever strategies the caller supplies. The defaults here reproduce
the standard policy: revenue is sale price times quantity, and the bonus is a
rank-banded share of profit with a multiplier for senior sellers.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from sales_pipeline.errors import BonusIndexError, FieldTypeError, InvalidRecordError
from sales_pipeline.performance.models import PurchaseRecord, SellerWithProfit
from sales_pipeline.utils.transforms import is_number, round_money

SENIOR_TITLE = "Senior Seller"
SENIOR_MULTIPLIER = 1.5


class RevenueStrategy(Protocol):
    def __call__(self, purchase: PurchaseRecord) -> float: ...


class BonusStrategy(Protocol):
    def __call__(self, index: int, total: int, seller: SellerWithProfit) -> float: ...


@dataclass(frozen=True)
class AnalysisOptions:
    calculate_revenue: RevenueStrategy
    calculate_bonus: BonusStrategy


def calculate_simple_revenue(purchase: PurchaseRecord) -> float:
    """Sum of sale_price * quantity over the purchase's items, unrounded."""
    items = getattr(purchase, "items", None)
    if not isinstance(items, Sequence) or isinstance(items, str):
        raise InvalidRecordError("purchase has no items sequence")

    revenue = 0.0
    for i, item in enumerate(items):
        sale_price = getattr(item, "sale_price", None)
        quantity = getattr(item, "quantity", None)
        if not is_number(sale_price) or not is_number(quantity):
            raise FieldTypeError("sale_price and quantity must be numbers", f"items[{i}]")
        revenue += sale_price * quantity
    return revenue


def bonus_rate(index: int, total: int) -> float:
    """Share of profit paid at a given rank. Earlier bands win where they overlap."""
    match index:
        case 0:
            return 0.15
        case 1 | 2:
            return 0.10
        case _ if index == total - 2:
            return 0.05
        case _:
            return 0.0


def calculate_bonus_by_profit(
    index: int,
    total: int,
    seller: SellerWithProfit,
    *,
    senior_title: str = SENIOR_TITLE,
    senior_multiplier: float = SENIOR_MULTIPLIER,
) -> float:
    for name, value in (("index", index), ("total", total)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise FieldTypeError(f"expected an int, got {type(value).__name__}", name)
    if seller is None:
        raise FieldTypeError("seller is required", "seller")
    profit = getattr(seller, "profit", None)
    if not is_number(profit):
        raise FieldTypeError(f"seller profit must be a finite number, got {profit!r}", "seller.profit")
    if not 0 <= index < total:
        raise BonusIndexError(f"rank {index} is outside [0, {total})")

    multiplier = senior_multiplier if getattr(seller, "position", "") == senior_title else 1
    return round_money(profit * bonus_rate(index, total) * multiplier)


@dataclass(frozen=True)
class ProfitBandBonus:
    """calculate_bonus_by_profit with a configurable senior title and multiplier."""

    senior_title: str = SENIOR_TITLE
    senior_multiplier: float = SENIOR_MULTIPLIER

    def __call__(self, index: int, total: int, seller: SellerWithProfit) -> float:
        return calculate_bonus_by_profit(
            index, total, seller,
            senior_title=self.senior_title,
            senior_multiplier=self.senior_multiplier,
        )


@dataclass(frozen=True)
class FlatRateBonus:
    """Same share of profit for every rank."""

    rate: float

    def __call__(self, index: int, total: int, seller: SellerWithProfit) -> float:
        if not 0 <= index < total:
            raise BonusIndexError(f"rank {index} is outside [0, {total})")
        return round_money(seller.profit * self.rate)


def default_options(senior_title: str = SENIOR_TITLE, senior_multiplier: float = SENIOR_MULTIPLIER) -> AnalysisOptions:
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=ProfitBandBonus(senior_title, senior_multiplier),
    )
