"""Pydantic schemas for the orders API.

Input schemas validate request bodies before they reach the engine and map
them onto domain objects; output schemas render domain objects with the
camelCase keys clients expect.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain import Item, MinItems, Offer, OfferCondition, Order, OrderLine, SpecificItem


def _require_number(v):
    # JSON numbers only; strings and booleans are not coerced
    if isinstance(v, (str, bool)):
        raise ValueError("must be a number")
    return v


# ---- Order lines ----
class OrderLineDTO(BaseModel):
    """A single order line as sent and returned over the wire.

    Attributes:
        id: Catalog item id.
        quantity: Positive number of units.
    """

    id: int = Field(strict=True)
    quantity: int = Field(strict=True, gt=0)

    def to_domain(self) -> OrderLine:
        return OrderLine(item_id=self.id, quantity=self.quantity)


class CreateOrderDTO(BaseModel):
    """Schema for placing an order.

    Attributes:
        items: Non-empty list of ``OrderLineDTO``.
    """

    items: List[OrderLineDTO] = Field(min_length=1)

    def to_domain(self) -> List[OrderLine]:
        return [line.to_domain() for line in self.items]


# ---- Items ----
class ItemDTO(BaseModel):
    """Schema for creating or updating a catalog item.

    ``id`` is optional: an unknown or missing id creates a new item.
    """

    id: Optional[int] = Field(default=None, strict=True)
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    stock: int = Field(strict=True, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price_type(cls, v):
        return _require_number(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @classmethod
    def from_domain(cls, item: Item) -> "ItemDTO":
        return cls(id=item.id, name=item.name, price=item.price, stock=item.stock)


# ---- Offers ----
class MinItemsConditionDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    min_items: int = Field(alias="minItems", strict=True, gt=0)


class SpecificItemConditionDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    item_id: int = Field(alias="itemId", strict=True, gt=0)


ConditionDTO = Union[MinItemsConditionDTO, SpecificItemConditionDTO]


class OfferDTO(BaseModel):
    """Schema for creating or updating an offer.

    Attributes:
        id: Optional id of the offer to overwrite.
        name: Non-empty offer name.
        condition: Either ``{"minItems": n}`` or ``{"itemId": id}``; any
            other shape fails validation.
        discount: Fraction between 0 and 1 inclusive.
    """

    id: Optional[int] = Field(default=None, strict=True)
    name: str = Field(min_length=1)
    condition: ConditionDTO
    discount: Decimal = Field(ge=0, le=1)

    @field_validator("discount", mode="before")
    @classmethod
    def validate_discount_type(cls, v):
        return _require_number(v)

    def condition_to_domain(self) -> OfferCondition:
        if isinstance(self.condition, MinItemsConditionDTO):
            return MinItems(count=self.condition.min_items)
        return SpecificItem(item_id=self.condition.item_id)

    @classmethod
    def from_domain(cls, offer: Offer) -> "OfferDTO":
        if isinstance(offer.condition, MinItems):
            condition = MinItemsConditionDTO(min_items=offer.condition.count)
        else:
            condition = SpecificItemConditionDTO(item_id=offer.condition.item_id)
        return cls(id=offer.id, name=offer.name, condition=condition, discount=offer.discount)


# ---- Orders (read side) ----
class OrderReadDTO(BaseModel):
    """Rendered order.

    Dumped with ``by_alias=True`` to produce ``appliedOffers`` and
    ``placedAt``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    items: List[OrderLineDTO]
    total: Decimal
    applied_offers: List[str] = Field(alias="appliedOffers")
    placed_at: datetime = Field(alias="placedAt")

    @classmethod
    def from_domain(cls, order: Order) -> "OrderReadDTO":
        return cls(
            id=order.id,
            items=[OrderLineDTO(id=line.item_id, quantity=line.quantity) for line in order.lines],
            total=order.total,
            applied_offers=list(order.applied_offers),
            placed_at=order.placed_at,
        )
