"""Domain models and errors for the order engine.

This module contains the dataclasses used by the catalog, the offer book and
the order log, the closed set of offer conditions, and the error hierarchy
raised by the engine. Nothing here depends on Django so the engine can be
exercised with plain objects.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Sequence, Tuple, Union


# ---- Errors ----
class DomainError(ValueError):
    """Base class for errors raised by the order engine.

    Every subclass carries a short upper-case ``code`` which the HTTP layer
    returns as ``detail``; ``str(exc)`` holds the human readable message.
    """

    code = "DOMAIN_ERROR"


class InvalidInput(DomainError):
    code = "INVALID_INPUT"


class NotFound(DomainError):
    code = "NOT_FOUND"

    def __init__(self, record_id: int, label: str = "Record"):
        self.record_id = record_id
        super().__init__(f"{label} {record_id} not found")


class ItemNotFound(NotFound):
    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: int):
        super().__init__(item_id, "Item")


class OfferNotFound(NotFound):
    code = "OFFER_NOT_FOUND"

    def __init__(self, offer_id: int):
        super().__init__(offer_id, "Offer")


class OrderNotFound(NotFound):
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_id: int):
        super().__init__(order_id, "Order")


class InsufficientStock(DomainError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Insufficient stock for item {item_id}")


# ---- Entities / DTOs ----
@dataclass
class Item:
    """A purchasable catalog entry.

    Attributes:
        id: Sequential identifier, unique within the catalog.
        name: Display name.
        price: Unit price, never negative.
        stock: Units available, never negative.
    """

    id: int
    name: str
    price: Decimal
    stock: int


@dataclass(frozen=True)
class OrderLine:
    """A single requested line of an order.

    Lines are input only; they are kept on the Order they belong to but are
    never stored on their own.
    """

    item_id: int
    quantity: int


# ---- Offer conditions ----
@dataclass(frozen=True)
class MinItems:
    """Matches when the order requests at least ``count`` units in total."""

    count: int

    def matches(self, lines: Sequence[OrderLine]) -> bool:
        return sum(line.quantity for line in lines) >= self.count


@dataclass(frozen=True)
class SpecificItem:
    """Matches when any line of the order references ``item_id``."""

    item_id: int

    def matches(self, lines: Sequence[OrderLine]) -> bool:
        return any(line.item_id == self.item_id for line in lines)


OfferCondition = Union[MinItems, SpecificItem]


@dataclass
class Offer:
    """A discount rule kept in the offer book.

    Attributes:
        id: Sequential identifier, unique within the offer book.
        name: Name reported in ``Order.applied_offers`` when the offer applies.
        condition: Either ``MinItems`` or ``SpecificItem``.
        discount: Fraction in [0, 1] taken off the running total.
    """

    id: int
    name: str
    condition: OfferCondition
    discount: Decimal

    def applies_to(self, lines: Sequence[OrderLine]) -> bool:
        return self.condition.matches(lines)


@dataclass(frozen=True)
class Order:
    """An order accepted by the engine.

    Orders are frozen: once appended to the order log they never change.

    Attributes:
        id: Sequential identifier within the order log.
        lines: The lines exactly as requested.
        total: Price after every matching offer was applied.
        applied_offers: Names of the applied offers, in offer book order.
        placed_at: UTC timestamp of placement.
    """

    id: int
    lines: Tuple[OrderLine, ...]
    total: Decimal
    applied_offers: Tuple[str, ...]
    placed_at: datetime
