"""Mini README: Tests for the shopping tray.

Structure:
    * add tests - snapshots, duplicate and availability rejection.
    * remove tests - positional removal keeps order and totals honest.
"""

from __future__ import annotations

import pytest

from trayledger.catalog import Catalog, Product
from trayledger.errors import AlreadyInTray, IndexOutOfRange, NotFound, Unavailable
from trayledger.ledger import Tray


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        [
            Product("p1", "Shuka Blanket", 100.0, capacity=10, available=5, sold=5),
            Product("p2", "Sisal Basket", 200.0, capacity=4, available=2, sold=2),
            Product("p3", "Soapstone Carving", 75.5, capacity=8, available=8),
            Product("p4", "Kikoy Wrap", 50.0, capacity=3, available=0, sold=3),
        ]
    )


def test_add_snapshots_price(catalog: Catalog) -> None:
    """Later catalog price changes must not alter what is already in the tray."""

    tray = Tray(catalog)
    tray.add_by_id("p1")
    catalog.find_by_id("p1").price = 999.0

    assert tray.total() == pytest.approx(100.0)
    assert tray.items[0].price == pytest.approx(100.0)


def test_duplicate_add_leaves_tray_unchanged(catalog: Catalog) -> None:
    tray = Tray(catalog)
    tray.add_by_id("p1")

    with pytest.raises(AlreadyInTray) as excinfo:
        tray.add_by_id("p1")

    assert "Shuka Blanket" in excinfo.value.message
    assert len(tray) == 1
    assert tray.total() == pytest.approx(100.0)


def test_add_rejects_unavailable_product(catalog: Catalog) -> None:
    tray = Tray(catalog)

    with pytest.raises(Unavailable):
        tray.add_by_id("p4")
    assert tray.is_empty


def test_add_by_id_unknown_product(catalog: Catalog) -> None:
    with pytest.raises(NotFound):
        Tray(catalog).add_by_id("nope")


def test_remove_at_preserves_order_and_total(catalog: Catalog) -> None:
    tray = Tray(catalog)
    for product_id in ("p1", "p2", "p3"):
        tray.add_by_id(product_id)

    removed = tray.remove_at(1)

    assert removed.product_id == "p2"
    assert [item.product_id for item in tray] == ["p1", "p3"]
    assert tray.total() == pytest.approx(175.5)


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_remove_at_out_of_range(catalog: Catalog, index: int) -> None:
    tray = Tray(catalog)
    tray.add_by_id("p1")
    tray.add_by_id("p2")

    with pytest.raises(IndexOutOfRange):
        tray.remove_at(index)
    assert len(tray) == 2


def test_total_tracks_adds_and_removes(catalog: Catalog) -> None:
    tray = Tray(catalog)
    tray.add_by_id("p1")
    tray.add_by_id("p3")
    tray.remove_at(0)
    tray.add_by_id("p2")
    tray.add_by_id("p1")

    assert tray.total() == pytest.approx(sum(item.price for item in tray.items))
    assert tray.total() == pytest.approx(375.5)


def test_clear_empties_tray(catalog: Catalog) -> None:
    tray = Tray(catalog)
    tray.add_by_id("p1")
    tray.clear()

    assert tray.is_empty
    assert tray.total() == 0.0
    assert tray.as_dict() == {"items": [], "count": 0, "total": 0.0}


def test_discard_removes_only_the_given_entries(catalog: Catalog) -> None:
    tray = Tray(catalog)
    tray.add_by_id("p1")
    purchased = tray.items
    tray.add_by_id("p2")

    assert tray.discard(purchased) == 1
    assert [item.product_id for item in tray] == ["p2"]
    assert tray.discard(purchased) == 0
