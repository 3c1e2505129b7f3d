"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items.  Totals are derived
once, when the order is created, and carried as stored values afterwards.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ordersvc.domain.exceptions import ValidationError
from ordersvc.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderItem:
    """A line of an order with the product price captured at creation time.

    ``price`` is a snapshot and never refreshed from the catalog.
    ``name`` is filled in on read from the catalog and is not persisted.
    """

    product_id: str
    quantity: Quantity
    price: Money
    name: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use ``Order.create()`` for new orders.  The plain constructor is kept
    for the repository, which rebuilds persisted orders as stored.
    """

    id: str
    items: list[OrderItem]
    total_amount: Money
    total_items: int
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    @staticmethod
    def create(items: list[OrderItem]) -> Order:
        """Create a new PENDING order and derive its totals from *items*."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        total_amount = Money.zero()
        total_items = 0
        for item in items:
            total_amount = total_amount + item.line_total
            total_items += item.quantity.value

        return Order(
            id=str(uuid.uuid4()),
            items=list(items),
            total_amount=total_amount,
            total_items=total_items,
        )

    @property
    def product_ids(self) -> list[str]:
        """Distinct product ids in item order."""
        return list(dict.fromkeys(item.product_id for item in self.items))
