"""Order engine: catalog and offer maintenance plus order placement.

``OrderEngine`` is the single entry point used by the HTTP views. It owns no
state of its own; everything lives on the injected ``Store`` and every public
method runs under the store lock.
"""

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .domain import (
    DomainError,
    InsufficientStock,
    InvalidInput,
    Item,
    ItemNotFound,
    Offer,
    OfferCondition,
    Order,
    OrderLine,
)
from .repository import Store

logger = logging.getLogger("orders")

CENTS = Decimal("0.01")


def compute_subtotal(priced_lines: Iterable[Tuple[Item, OrderLine]]) -> Decimal:
    """Sum ``price * quantity`` over resolved lines."""
    return sum((item.price * line.quantity for item, line in priced_lines), Decimal("0"))


def apply_offers(subtotal: Decimal, offers: Iterable[Offer], lines: Sequence[OrderLine]) -> Tuple[Decimal, List[str]]:
    """Stack every matching offer onto ``subtotal``.

    Offers are visited in the given order and each match multiplies the
    running total by ``1 - discount``, so a 10% and a 5% offer on 100 give
    85.5 rather than 85. The result is rounded half-up to cents.

    Args:
        subtotal: Pre-discount sum.
        offers: Offers in offer book order.
        lines: The order lines the conditions are evaluated against.

    Returns:
        tuple[Decimal, list[str]]: The discounted total and the names of the
        offers that applied.
    """
    total = subtotal
    applied: List[str] = []
    for offer in offers:
        if offer.applies_to(lines):
            total *= Decimal("1") - offer.discount
            applied.append(offer.name)
    return total.quantize(CENTS, rounding=ROUND_HALF_UP), applied


def _check_lines(lines: Sequence[OrderLine]) -> None:
    if not lines:
        raise InvalidInput("EMPTY_ORDER")
    for line in lines:
        if not isinstance(line.item_id, int) or isinstance(line.item_id, bool):
            raise InvalidInput(f"Invalid item id {line.item_id!r}")
        if not isinstance(line.quantity, int) or isinstance(line.quantity, bool) or line.quantity <= 0:
            raise InvalidInput(f"Invalid quantity {line.quantity!r} for item {line.item_id}")


class OrderEngine:
    """Service that mutates the catalog and offer book and places orders.

    Args:
        store: State the engine operates on.
        clock: Callable returning the placement timestamp; defaults to the
            current UTC time.
    """

    def __init__(self, store: Store, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    # ---- Catalog ----
    def list_items(self) -> List[Item]:
        with self.store.lock:
            return self.store.catalog.list()

    def upsert_item(self, name: str, price: Decimal, stock: int, item_id: Optional[int] = None) -> Tuple[Item, bool]:
        with self.store.lock:
            item, created = self.store.catalog.upsert(name, price, stock, item_id=item_id)
        logger.info("%s item %s", "Added" if created else "Updated", item.id, extra={"item_id": item.id})
        return item, created

    def remove_item(self, item_id: int) -> bool:
        with self.store.lock:
            try:
                self.store.catalog.remove(item_id)
            except DomainError as e:
                logger.warning(str(e), extra={"item_id": item_id})
                raise
        logger.info("Removed item %s", item_id, extra={"item_id": item_id})
        return True

    # ---- Offers ----
    def list_offers(self) -> List[Offer]:
        with self.store.lock:
            return self.store.offers.list()

    def upsert_offer(
        self,
        name: str,
        condition: OfferCondition,
        discount: Decimal,
        offer_id: Optional[int] = None,
    ) -> Tuple[Offer, bool]:
        with self.store.lock:
            offer, created = self.store.offers.upsert(name, condition, discount, offer_id=offer_id)
        logger.info("%s offer %s", "Added" if created else "Updated", offer.id, extra={"offer_id": offer.id})
        return offer, created

    def remove_offer(self, offer_id: int) -> bool:
        with self.store.lock:
            try:
                self.store.offers.remove(offer_id)
            except DomainError as e:
                logger.warning(str(e), extra={"offer_id": offer_id})
                raise
        logger.info("Removed offer %s", offer_id, extra={"offer_id": offer_id})
        return True

    # ---- Orders ----
    def list_orders(self) -> List[Order]:
        with self.store.lock:
            return self.store.orders.list()

    def get_order(self, order_id: int) -> Order:
        with self.store.lock:
            return self.store.orders.get(order_id)

    def place_order(self, lines: Sequence[OrderLine]) -> Order:
        """Validate, price and record an order.

        Every check runs before stock is touched: a rejected order leaves the
        catalog exactly as it was.

        Args:
            lines: Requested lines. Several lines may reference the same
                item; their quantities are summed for the stock check.

        Returns:
            Order: The order appended to the order log.

        Raises:
            InvalidInput: Empty order, non-integer id or non-positive quantity.
            ItemNotFound: A line references an unknown item.
            InsufficientStock: An item does not have enough units.
        """
        lines = tuple(lines)
        with self.store.lock:
            try:
                order = self._place(lines)
            except DomainError as e:
                logger.warning(str(e), extra={"code": e.code})
                raise
        logger.info(
            "Order placed: %s",
            order.id,
            extra={"order_id": order.id, "total": str(order.total), "applied_offers": list(order.applied_offers)},
        )
        return order

    def _place(self, lines: Tuple[OrderLine, ...]) -> Order:
        # 1) Shape
        _check_lines(lines)

        # 2) Resolve
        catalog = self.store.catalog
        resolved: List[Tuple[Item, OrderLine]] = []
        for line in lines:
            item = catalog.get(line.item_id)
            if item is None:
                raise ItemNotFound(line.item_id)
            resolved.append((item, line))

        # 3) Stock, checked against the summed quantity per item
        requested: Dict[int, int] = {}
        for item, line in resolved:
            requested[item.id] = requested.get(item.id, 0) + line.quantity
        for item_id, qty in requested.items():
            if catalog.get(item_id).stock < qty:
                raise InsufficientStock(item_id)

        # 4-5) Price
        subtotal = compute_subtotal(resolved)
        total, applied = apply_offers(subtotal, self.store.offers.list(), lines)

        # 6) Deduct
        for item, line in resolved:
            item.stock -= line.quantity

        # 7) Record
        order = Order(
            id=self.store.orders.next_id(),
            lines=lines,
            total=total,
            applied_offers=tuple(applied),
            placed_at=self.clock(),
        )
        return self.store.orders.append(order)
