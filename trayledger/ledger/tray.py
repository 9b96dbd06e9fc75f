"""Mini README: The shopping tray holding items awaiting purchase.

Each product may appear at most once; adding it again is rejected rather
than incrementing a quantity. Items keep the price seen at add time so a
later catalog price change does not alter the tray total. The tray lives
for one session and is never persisted.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from ..catalog import Catalog, Product
from ..errors import AlreadyInTray, IndexOutOfRange, Unavailable
from ..logging_utils import get_logger
from .models import TrayItem

LOGGER = get_logger(__name__)


class Tray:
    """Ordered collection of price snapshots pending purchase."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._items: List[TrayItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TrayItem]:
        return iter(list(self._items))

    @property
    def items(self) -> Tuple[TrayItem, ...]:
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def contains(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self._items)

    def add(self, product: Product) -> TrayItem:
        """Append a snapshot of ``product`` unless it is already present or sold out."""

        if self.contains(product.product_id):
            raise AlreadyInTray(product.product_id, product.name)
        if product.available <= 0:
            raise Unavailable(product.product_id, product.name)
        item = TrayItem(product_id=product.product_id, name=product.name, price=product.price)
        self._items.append(item)
        LOGGER.info("Added to tray: %s (%s)", product.name, product.product_id)
        return item

    def add_by_id(self, product_id: str) -> TrayItem:
        """Resolve ``product_id`` through the catalog and add it."""

        return self.add(self._catalog.find_by_id(product_id))

    def remove_at(self, index: int) -> TrayItem:
        """Remove the item at ``index``; negative positions are rejected."""

        if not 0 <= index < len(self._items):
            raise IndexOutOfRange(index, len(self._items))
        item = self._items.pop(index)
        LOGGER.info("Removed from tray: %s", item.name)
        return item

    def total(self) -> float:
        return sum((item.price for item in self._items), 0.0)

    def discard(self, items: Iterable[TrayItem]) -> int:
        """Drop exactly the given entries, leaving anything added since in place."""

        purchased = {id(item) for item in items}
        kept = [item for item in self._items if id(item) not in purchased]
        removed = len(self._items) - len(kept)
        self._items = kept
        LOGGER.debug("Discarded %s purchased item(s) from tray", removed)
        return removed

    def clear(self) -> None:
        self._items.clear()
        LOGGER.debug("Tray cleared")

    def as_dict(self) -> dict:
        return {
            "items": [item.as_dict() for item in self._items],
            "count": len(self._items),
            "total": self.total(),
        }
