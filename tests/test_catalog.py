"""Mini README: Tests for product records, stock badges and the catalog.

Structure:
    * decrement tests - stock moves from available to sold, never below zero.
    * lookup tests - unknown ids raise NotFound.
    * record tests - invariants and JSON parsing of products.
    * stock_level tests - badge thresholds.
"""

from __future__ import annotations

import pytest

from trayledger.catalog import Catalog, Product, StockLevel, stock_level
from trayledger.errors import NotFound, OutOfStock, ValidationError


def _catalog() -> Catalog:
    return Catalog(
        [
            Product("p1", "Shuka Blanket", 100.0, capacity=10, available=1, sold=9),
            Product("p2", "Kikoy Wrap", 50.0, capacity=3, available=0, sold=3),
        ]
    )


def test_decrement_stock_moves_unit_to_sold() -> None:
    catalog = _catalog()

    product = catalog.decrement_stock("p1")

    assert product.available == 0
    assert product.sold == 10
    assert catalog.find_by_id("p1") is product


def test_decrement_stock_refuses_when_sold_out() -> None:
    """Selling out must not push availability negative."""

    catalog = _catalog()

    with pytest.raises(OutOfStock) as excinfo:
        catalog.decrement_stock("p2")

    assert "Kikoy Wrap" in str(excinfo.value)
    product = catalog.find_by_id("p2")
    assert (product.available, product.sold) == (0, 3)


def test_find_by_id_unknown_product() -> None:
    with pytest.raises(NotFound):
        _catalog().find_by_id("missing")
    assert _catalog().get("missing") is None


def test_product_rejects_counters_beyond_capacity() -> None:
    with pytest.raises(ValidationError):
        Product("p9", "Overbooked", 10.0, capacity=5, available=4, sold=2)


def test_product_from_dict_reports_missing_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Product.from_dict({"id": "p1", "name": "No price", "capacity": 1, "available": 1})

    assert "price" in excinfo.value.message


def test_product_round_trips_store_field_names() -> None:
    record = {"id": "p1", "name": "Shuka", "price": 100, "capacity": 4, "available": 3, "sold": 1}

    assert Product.from_dict(record).as_dict() == {**record, "price": 100.0}


def test_replace_all_rejects_duplicate_ids() -> None:
    duplicate = Product("p1", "Shuka Blanket", 100.0, capacity=1, available=1)

    with pytest.raises(ValidationError):
        Catalog([duplicate, duplicate])


@pytest.mark.parametrize(
    ("available", "expected"),
    [(0, StockLevel.OUT), (1, StockLevel.LOW), (5, StockLevel.LOW), (6, StockLevel.HIGH)],
)
def test_stock_level_thresholds(available: int, expected: StockLevel) -> None:
    product = Product("p1", "Shuka", 1.0, capacity=10, available=available)

    assert stock_level(product) is expected


def test_stock_level_labels() -> None:
    assert StockLevel.OUT.label == "Out of Stock"
    assert StockLevel.LOW.label == "Low Stock"
    assert StockLevel.HIGH.label == "In Stock"
