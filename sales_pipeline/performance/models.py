"""Typed records for the performance report, plus pandera schemas for the numeric checks."""

from dataclasses import dataclass, field

from pandera.pandas import Check, Column, DataFrameSchema

type TopProduct = dict[str, str | int | float]


@dataclass(frozen=True)
class Seller:
    id: str
    first_name: str
    last_name: str
    position: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Product:
    sku: str
    name: str
    purchase_price: float


@dataclass(frozen=True)
class LineItem:
    sku: str
    sale_price: float
    quantity: int


@dataclass(frozen=True)
class PurchaseRecord:
    seller_id: str
    items: tuple[LineItem, ...]


@dataclass(frozen=True)
class Dataset:
    sellers: tuple[Seller, ...]
    products: tuple[Product, ...]
    purchase_records: tuple[PurchaseRecord, ...]


@dataclass(frozen=True)
class SellerWithProfit:
    """Seller card handed to a bonus strategy, carrying the profit it ranked on."""

    id: str
    first_name: str
    last_name: str
    position: str
    profit: float

    @classmethod
    def from_seller(cls, seller: Seller, profit: float) -> "SellerWithProfit":
        return cls(
            id=seller.id,
            first_name=seller.first_name,
            last_name=seller.last_name,
            position=seller.position,
            profit=profit,
        )


@dataclass
class ProductStat:
    order: int
    count: int = 0
    revenue: float = 0.0
    profit: float = 0.0


@dataclass
class SellerStat:
    """Running totals for one seller. Amounts stay unrounded until the report is built."""

    seller_id: str
    order: int
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products: dict[str, ProductStat] = field(default_factory=dict)

    def add_item(self, sku: str, quantity: int, revenue: float, profit: float) -> None:
        self.revenue += revenue
        self.profit += profit

        stat = self.products.get(sku)
        if stat is None:
            stat = self.products[sku] = ProductStat(order=len(self.products))
        stat.count += quantity
        stat.revenue += revenue
        stat.profit += profit


@dataclass(frozen=True)
class SellerReport:
    seller_id: str
    name: str
    revenue: float
    profit: float
    sales_count: int
    bonus: float
    top_products: tuple[TopProduct, ...]

    def to_dict(self) -> dict:
        return {
            "seller_id": self.seller_id,
            "name": self.name,
            "revenue": self.revenue,
            "profit": self.profit,
            "sales_count": self.sales_count,
            "bonus": self.bonus,
            "top_products": [dict(p) for p in self.top_products],
        }


def _two_decimals(series):
    cents = series * 100
    return (cents.round() - cents).abs() < 1e-6


# Product catalogue, indexed by "products[i]"
PRODUCT_SCHEMA = DataFrameSchema(
    columns={
        "purchase_price": Column(float, Check.greater_than_or_equal_to(0)),
    },
    strict=False,
    coerce=True,
)

# One row per line item, indexed by "purchase_records[i].items[j]"
LINE_ITEM_SCHEMA = DataFrameSchema(
    columns={
        "sale_price": Column(float, Check.greater_than_or_equal_to(0)),
        "quantity": Column(float, [
            Check.greater_than_or_equal_to(1),
            Check(lambda s: s % 1 == 0, name="whole_number", error="quantity must be a whole number"),
        ]),
    },
    strict=False,
    coerce=True,
)

# Final report, one row per ranked seller
REPORT_SCHEMA = DataFrameSchema(
    columns={
        "rank": Column(int, Check.greater_than_or_equal_to(1), unique=True),
        "seller_id": Column(str, unique=True),
        "revenue": Column(float, Check(_two_decimals, name="two_decimals")),
        "profit": Column(float, Check(_two_decimals, name="two_decimals")),
        "sales_count": Column(int, Check.greater_than_or_equal_to(0)),
        "bonus": Column(float, Check(_two_decimals, name="two_decimals")),
    },
    checks=[
        Check(lambda df: df["profit"].is_monotonic_decreasing, name="ranked_by_profit"),
    ],
    strict=False,
    coerce=True,
)
