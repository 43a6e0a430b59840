"""
Shared fixtures for the sales pipeline tests.

The sample dataset has five sellers whose profits are all distinct:

    s1 70.0 (Senior Seller)   s2 40.0   s4 25.0 (Senior Seller)   s3 6.0   s5 2.0

plus one item with an unknown sku (attributed to s1) and one purchase record
for an unknown seller.
"""

import copy

import pytest

from sales_pipeline.performance.strategies import (
    AnalysisOptions,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: isolated component tests")
    config.addinivalue_line("markers", "integration: full pipeline and CLI tests")


SELLERS = [
    {"id": "s1", "first_name": "Anna", "last_name": "Ivanova", "position": "Senior Seller"},
    {"id": "s2", "first_name": "Boris", "last_name": "Petrov", "position": "Seller"},
    {"id": "s3", "first_name": "Clara", "last_name": "Smirnova", "position": "Seller"},
    {"id": "s4", "first_name": "Dmitri", "last_name": "Orlov", "position": "Senior Seller"},
    {"id": "s5", "first_name": "Elena", "last_name": "Kuznetsova", "position": "Seller"},
]

PRODUCTS = [
    {"sku": "P1", "name": "Widget", "purchase_price": 10},
    {"sku": "P2", "name": "Gadget", "purchase_price": 20},
    {"sku": "P3", "name": "Doohickey", "purchase_price": 5},
    {"sku": "P4", "name": "Gizmo", "purchase_price": 1},
]

PURCHASE_RECORDS = [
    {"seller_id": "s1", "items": [
        {"sku": "P1", "sale_price": 20, "quantity": 5},
        {"sku": "P2", "sale_price": 30, "quantity": 2},
    ]},
    {"seller_id": "s2", "items": [{"sku": "P3", "sale_price": 15, "quantity": 4}]},
    {"seller_id": "s3", "items": [{"sku": "P1", "sale_price": 12, "quantity": 3}]},
    {"seller_id": "s4", "items": [{"sku": "P4", "sale_price": 6, "quantity": 5}]},
    {"seller_id": "s5", "items": [{"sku": "P2", "sale_price": 22, "quantity": 1}]},
    {"seller_id": "s1", "items": [{"sku": "P9", "sale_price": 100, "quantity": 1}]},
    {"seller_id": "ghost", "items": [{"sku": "P1", "sale_price": 500, "quantity": 10}]},
]


@pytest.fixture
def raw_dataset():
    """Fresh, mutable copy of the sample dataset."""
    return copy.deepcopy({
        "sellers": SELLERS,
        "products": PRODUCTS,
        "purchase_records": PURCHASE_RECORDS,
    })


@pytest.fixture
def options():
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
    )


def _make_dataset(sellers, records, products=None):
    return {
        "sellers": [
            {"id": sid, "first_name": sid.upper(), "last_name": "Test", "position": "Seller"}
            for sid in sellers
        ],
        "products": products or [
            {"sku": "A", "name": "Alpha", "purchase_price": 0},
            {"sku": "B", "name": "Beta", "purchase_price": 0},
            {"sku": "C", "name": "Gamma", "purchase_price": 0},
            {"sku": "D", "name": "Delta", "purchase_price": 0},
            {"sku": "E", "name": "Epsilon", "purchase_price": 0},
        ],
        "purchase_records": [
            {"seller_id": sid, "items": [
                {"sku": sku, "sale_price": price, "quantity": qty} for sku, price, qty in items
            ]}
            for sid, items in records
        ],
    }


@pytest.fixture
def make_dataset():
    """Small dataset builder: sellers as ids, records as (seller_id, [(sku, price, qty), ...]).

    Default products all cost 0, so profit equals revenue.
    """
    return _make_dataset
