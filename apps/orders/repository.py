"""In-memory registries for items, offers and orders.

The catalog and the offer book share one small registry abstraction that
keeps records in insertion order and hands out sequential ids. Orders go to
an append-only log. A ``Store`` bundles the three registries with the lock
that guards them, so the engine receives its state explicitly instead of
reaching for module globals.
"""

import logging
import threading
from decimal import Decimal
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from .domain import (
    Item,
    ItemNotFound,
    MinItems,
    NotFound,
    Offer,
    OfferCondition,
    OfferNotFound,
    Order,
    OrderNotFound,
    SpecificItem,
)

logger = logging.getLogger("orders")

T = TypeVar("T", Item, Offer)


class Registry(Generic[T]):
    """Ordered collection of records addressed by an integer ``id``."""

    label = "record"
    not_found: Callable[[int], NotFound] = NotFound

    def __init__(self, records: Optional[List[T]] = None):
        self._records: List[T] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> List[T]:
        """Return the records in stored order."""
        return list(self._records)

    def get(self, record_id) -> Optional[T]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def remove(self, record_id: int) -> bool:
        """Remove a record by id.

        Args:
            record_id: Identifier of the record to drop.

        Returns:
            bool: Always True; a missing id raises instead.

        Raises:
            NotFound: When no record has ``record_id``. The registry is left
                untouched.
        """
        record = self.get(record_id)
        if record is None:
            raise self.not_found(record_id)
        self._records.remove(record)
        return True

    def _next_id(self) -> int:
        # Ids are handed out as count + 1. After a removal that value may
        # already be taken, in which case max + 1 keeps ids unique.
        candidate = len(self._records) + 1
        if self.get(candidate) is None:
            return candidate
        fallback = max(r.id for r in self._records) + 1
        logger.warning(
            "sequential id already in use",
            extra={"registry": self.label, "candidate_id": candidate, "assigned_id": fallback},
        )
        return fallback

    def _append(self, record: T) -> T:
        self._records.append(record)
        return record


class Catalog(Registry[Item]):
    """Registry of purchasable items."""

    label = "catalog"
    not_found = ItemNotFound

    def upsert(self, name: str, price: Decimal, stock: int, item_id: Optional[int] = None) -> Tuple[Item, bool]:
        """Create an item or overwrite an existing one in place.

        Args:
            name: Item name.
            price: Unit price.
            stock: Units available.
            item_id: Id of the item to overwrite. Unknown or missing ids
                create a new item with a fresh sequential id.

        Returns:
            tuple[Item, bool]: The stored item and whether it was created.
        """
        existing = self.get(item_id) if item_id is not None else None
        if existing is not None:
            existing.name = name
            existing.price = price
            existing.stock = stock
            return existing, False
        return self._append(Item(id=self._next_id(), name=name, price=price, stock=stock)), True


class OfferBook(Registry[Offer]):
    """Registry of discount offers, iterated in stored order when pricing."""

    label = "offers"
    not_found = OfferNotFound

    def upsert(
        self,
        name: str,
        condition: OfferCondition,
        discount: Decimal,
        offer_id: Optional[int] = None,
    ) -> Tuple[Offer, bool]:
        """Create an offer or overwrite an existing one in place.

        Same contract as ``Catalog.upsert``.
        """
        existing = self.get(offer_id) if offer_id is not None else None
        if existing is not None:
            existing.name = name
            existing.condition = condition
            existing.discount = discount
            return existing, False
        offer = Offer(id=self._next_id(), name=name, condition=condition, discount=discount)
        return self._append(offer), True


class OrderLog:
    """Append-only log of placed orders."""

    def __init__(self):
        self._orders: List[Order] = []

    def __len__(self) -> int:
        return len(self._orders)

    def next_id(self) -> int:
        return len(self._orders) + 1

    def append(self, order: Order) -> Order:
        self._orders.append(order)
        return order

    def list(self) -> List[Order]:
        return list(self._orders)

    def get(self, order_id: int) -> Order:
        for order in self._orders:
            if order.id == order_id:
                return order
        raise OrderNotFound(order_id)


class Store:
    """Process state of the service: catalog, offer book and order log.

    ``lock`` is re-entrant and is held by the engine for the duration of
    every operation, which keeps the stock and id invariants intact when the
    host serves requests from several threads.
    """

    def __init__(self, catalog: Optional[Catalog] = None, offers: Optional[OfferBook] = None):
        self.catalog = catalog if catalog is not None else Catalog()
        self.offers = offers if offers is not None else OfferBook()
        self.orders = OrderLog()
        self.lock = threading.RLock()

    @classmethod
    def seeded(cls) -> "Store":
        """Return a store holding the demo catalog and offers."""
        catalog = Catalog(
            [
                Item(id=1, name="Laptop", price=Decimal("999.99"), stock=10),
                Item(id=2, name="Phone", price=Decimal("499.99"), stock=20),
                Item(id=3, name="Headphones", price=Decimal("79.99"), stock=50),
            ]
        )
        offers = OfferBook(
            [
                Offer(id=1, name="Buy 2 Get 10% Off", condition=MinItems(2), discount=Decimal("0.1")),
                Offer(id=2, name="Laptop 5% Off", condition=SpecificItem(1), discount=Decimal("0.05")),
            ]
        )
        return cls(catalog=catalog, offers=offers)
