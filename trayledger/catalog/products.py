"""Mini README: Product records and the in-memory catalog.

Structure:
    * StockLevel - enum classifying availability for display.
    * Product - dataclass holding price and stock counters for one item.
    * stock_level - helper mapping a product onto a StockLevel.
    * Catalog - id-indexed product collection with the single stock
      mutation path used by the ledger.

Products are loaded from the external store and mutated only through
``Catalog.decrement_stock`` when a purchase is finalized. Mutations are
visible to the next read immediately; the catalog holds no copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from ..errors import NotFound, OutOfStock, ValidationError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

LOW_STOCK_THRESHOLD = 5


class StockLevel(str, Enum):
    """Availability bands shown next to each product."""

    OUT = "out"
    LOW = "low"
    HIGH = "high"

    @property
    def label(self) -> str:
        return {
            StockLevel.OUT: "Out of Stock",
            StockLevel.LOW: "Low Stock",
            StockLevel.HIGH: "In Stock",
        }[self]


@dataclass(slots=True)
class Product:
    """A sellable item with a fixed capacity and live stock counters."""

    product_id: str
    name: str
    price: float
    capacity: int
    available: int
    sold: int = 0

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValidationError(f"Product {self.product_id} has a negative price.")
        if self.capacity < 0 or self.sold < 0:
            raise ValidationError(f"Product {self.product_id} has negative stock counters.")
        if not 0 <= self.available <= self.capacity:
            raise ValidationError(
                f"Product {self.product_id} availability {self.available} "
                f"is outside 0..{self.capacity}."
            )
        if self.available + self.sold > self.capacity:
            raise ValidationError(
                f"Product {self.product_id} has more stock available and sold than capacity."
            )

    @property
    def in_stock(self) -> bool:
        return self.available > 0

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Product":
        """Build a product from the store's JSON representation."""

        try:
            return cls(
                product_id=str(payload["id"]),
                name=str(payload["name"]),
                price=float(payload["price"]),  # type: ignore[arg-type]
                capacity=int(payload["capacity"]),  # type: ignore[arg-type]
                available=int(payload["available"]),  # type: ignore[arg-type]
                sold=int(payload.get("sold") or 0),  # type: ignore[arg-type]
            )
        except KeyError as error:
            raise ValidationError(f"Product record is missing field {error.args[0]!r}.") from error
        except (TypeError, ValueError) as error:
            raise ValidationError(f"Product record is malformed: {error}") from error

    def as_dict(self) -> Dict[str, object]:
        """Export the product using the store's field names."""

        return {
            "id": self.product_id,
            "name": self.name,
            "price": self.price,
            "capacity": self.capacity,
            "available": self.available,
            "sold": self.sold,
        }


def stock_level(product: Product, low_threshold: int = LOW_STOCK_THRESHOLD) -> StockLevel:
    """Classify a product's availability for the storefront badges."""

    if product.available == 0:
        return StockLevel.OUT
    if product.available <= low_threshold:
        return StockLevel.LOW
    return StockLevel.HIGH


class Catalog:
    """Hold products fetched from the store, keyed by id in load order."""

    def __init__(self, products: Optional[Iterable[Product]] = None) -> None:
        self._products: Dict[str, Product] = {}
        if products:
            self.replace_all(products)

    def replace_all(self, products: Iterable[Product]) -> None:
        """Swap the catalog contents for a freshly loaded product list."""

        loaded: Dict[str, Product] = {}
        for product in products:
            if product.product_id in loaded:
                raise ValidationError(f"Product {product.product_id} appears twice in the catalog.")
            loaded[product.product_id] = product
        self._products = loaded
        LOGGER.debug("Catalog now holds %s products", len(self._products))

    def __len__(self) -> int:
        return len(self._products)

    def list_products(self) -> List[Product]:
        return list(self._products.values())

    def find_by_id(self, product_id: str) -> Product:
        """Return the live product record or raise ``NotFound``."""

        product = self._products.get(product_id)
        if product is None:
            raise NotFound(f"Product {product_id} not found.", details={"product_id": product_id})
        return product

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def decrement_stock(self, product_id: str) -> Product:
        """Move one unit from available to sold, refusing when none are left."""

        product = self.find_by_id(product_id)
        if product.available <= 0:
            raise OutOfStock(product.product_id, product.name)
        product.available -= 1
        product.sold += 1
        LOGGER.debug(
            "Stock for %s now available=%s sold=%s",
            product.product_id,
            product.available,
            product.sold,
        )
        return product
