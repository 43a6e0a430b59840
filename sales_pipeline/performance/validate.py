"""Input validation. Turns raw dataset records into typed records or fails fast."""

import logging
from collections.abc import Mapping, Sequence

import pandas as pd

from sales_pipeline.errors import (
    EmptyCollectionError,
    FieldTypeError,
    InvalidRecordError,
    MissingStrategyError,
    ShapeError,
)
from sales_pipeline.performance.models import (
    LINE_ITEM_SCHEMA,
    PRODUCT_SCHEMA,
    Dataset,
    LineItem,
    Product,
    PurchaseRecord,
    Seller,
)
from sales_pipeline.performance.strategies import AnalysisOptions
from sales_pipeline.utils.transforms import is_integral, is_number
from sales_pipeline.utils.validators import check_frame

logger = logging.getLogger(__name__)

type RawCollections = dict[str, Sequence]

COLLECTIONS = ("sellers", "products", "purchase_records")

# Accepted spellings for each strategy, first match wins
STRATEGY_KEYS = {
    "calculate_revenue": ("calculate_revenue", "calculateRevenue"),
    "calculate_bonus": ("calculate_bonus", "calculateBonus"),
}

_MISSING = object()


def _get(obj: object, key: str) -> object:
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    return getattr(obj, key, _MISSING)


def is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_object(value: object) -> bool:
    """Mappings and plain objects qualify; None, scalars and sequences do not."""
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return False
    return isinstance(value, Mapping) or not is_sequence(value)


def _require_text(record: object, name: str, location: str) -> str:
    value = _get(record, name)
    if value is _MISSING or value is None or value == "":
        raise InvalidRecordError(f"missing required field '{name}'", f"{location}.{name}")
    if not isinstance(value, str):
        raise FieldTypeError(f"expected a string, got {type(value).__name__}", f"{location}.{name}")
    return value


def _require_number(record: object, name: str, location: str) -> float:
    value = _get(record, name)
    if value is _MISSING or value is None:
        raise InvalidRecordError(f"missing required field '{name}'", f"{location}.{name}")
    if not is_number(value):
        raise FieldTypeError(f"expected a number, got {type(value).__name__}", f"{location}.{name}")
    return float(value)


def _require_record(record: object, location: str) -> None:
    if not _is_object(record):
        raise InvalidRecordError(f"expected a record, got {type(record).__name__}", location)


def check_dataset_shape(data: object) -> RawCollections:
    """Check the dataset exposes the three collections and none of them is empty."""
    if not _is_object(data):
        raise ShapeError(f"dataset must be an object, got {type(data).__name__}")

    collections: RawCollections = {}
    for name in COLLECTIONS:
        value = _get(data, name)
        if value is _MISSING or value is None:
            raise ShapeError(f"dataset is missing '{name}'")
        if not is_sequence(value):
            raise ShapeError(f"'{name}' must be a sequence, got {type(value).__name__}")
        collections[name] = value

    for name in COLLECTIONS:
        if len(collections[name]) == 0:
            raise EmptyCollectionError(f"'{name}' is empty")

    return collections


def validate_options(options: object) -> AnalysisOptions:
    """Check both calculation strategies are supplied and callable."""
    if isinstance(options, AnalysisOptions):
        candidates = {
            "calculate_revenue": options.calculate_revenue,
            "calculate_bonus": options.calculate_bonus,
        }
    elif _is_object(options):
        candidates = {}
        for name, keys in STRATEGY_KEYS.items():
            found = [v for v in (_get(options, k) for k in keys) if v is not _MISSING]
            candidates[name] = found[0] if found else None
    else:
        raise ShapeError(f"options must be an object, got {type(options).__name__}")

    for name, strategy in candidates.items():
        if strategy is None:
            raise MissingStrategyError(f"'{name}' function is required")
        if not callable(strategy):
            raise MissingStrategyError(f"'{name}' must be callable, got {type(strategy).__name__}")

    return AnalysisOptions(**candidates)


def _parse_sellers(raw: Sequence) -> tuple[Seller, ...]:
    sellers = []
    for i, record in enumerate(raw):
        location = f"sellers[{i}]"
        _require_record(record, location)
        seller_id = _require_text(record, "id", location)
        first_name = _require_text(record, "first_name", location)
        last_name = _require_text(record, "last_name", location)

        # position is optional; only the bonus policy reads it
        position = _get(record, "position")
        if position is _MISSING or position is None:
            position = ""
        elif not isinstance(position, str):
            raise FieldTypeError(f"expected a string, got {type(position).__name__}", f"{location}.position")

        sellers.append(Seller(id=seller_id, first_name=first_name, last_name=last_name, position=position))
    return tuple(sellers)


def _parse_products(raw: Sequence) -> tuple[Product, ...]:
    products = []
    for i, record in enumerate(raw):
        location = f"products[{i}]"
        _require_record(record, location)
        products.append(Product(
            sku=_require_text(record, "sku", location),
            name=_require_text(record, "name", location),
            purchase_price=_require_number(record, "purchase_price", location),
        ))

    frame = pd.DataFrame(
        {"purchase_price": [p.purchase_price for p in products]},
        index=[f"products[{i}]" for i in range(len(products))],
    )
    check_frame(frame, PRODUCT_SCHEMA)
    return tuple(products)


def _parse_purchase_records(raw: Sequence) -> tuple[PurchaseRecord, ...]:
    records = []
    rows = []
    for i, record in enumerate(raw):
        location = f"purchase_records[{i}]"
        _require_record(record, location)
        seller_id = _require_text(record, "seller_id", location)

        raw_items = _get(record, "items")
        if raw_items is _MISSING or raw_items is None:
            raise InvalidRecordError("missing required field 'items'", f"{location}.items")
        if not is_sequence(raw_items):
            raise FieldTypeError(f"expected a sequence, got {type(raw_items).__name__}", f"{location}.items")

        items = []
        for j, raw_item in enumerate(raw_items):
            item_location = f"{location}.items[{j}]"
            _require_record(raw_item, item_location)
            sku = _require_text(raw_item, "sku", item_location)
            sale_price = _require_number(raw_item, "sale_price", item_location)
            quantity = _require_number(raw_item, "quantity", item_location)
            rows.append({"location": item_location, "sale_price": sale_price, "quantity": quantity})
            items.append(LineItem(
                sku=sku,
                sale_price=sale_price,
                quantity=int(quantity) if is_integral(quantity) else quantity,
            ))
        records.append(PurchaseRecord(seller_id=seller_id, items=tuple(items)))

    frame = pd.DataFrame(rows, columns=["location", "sale_price", "quantity"]).set_index("location")
    check_frame(frame, LINE_ITEM_SCHEMA)
    return tuple(records)


def parse_records(collections: RawCollections) -> Dataset:
    """Field-level checks for every seller, product, purchase record and line item."""
    dataset = Dataset(
        sellers=_parse_sellers(collections["sellers"]),
        products=_parse_products(collections["products"]),
        purchase_records=_parse_purchase_records(collections["purchase_records"]),
    )
    logger.debug(
        "Validated %d sellers, %d products, %d purchase records",
        len(dataset.sellers), len(dataset.products), len(dataset.purchase_records),
    )
    return dataset


def validate_dataset(data: object) -> Dataset:
    return parse_records(check_dataset_shape(data))


def validate_inputs(data: object, options: object) -> tuple[Dataset, AnalysisOptions]:
    """Run every check in order: dataset shape, options, then record fields."""
    collections = check_dataset_shape(data)
    strategies = validate_options(options)
    return parse_records(collections), strategies
