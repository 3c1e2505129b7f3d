"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from ordersvc.domain.model.order import Order
from ordersvc.domain.model.product import CatalogProduct


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the caller asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    quantity: int
    price: Decimal
    name: str | None = None


@dataclass(frozen=True)
class OrderDTO:
    id: str
    total_amount: Decimal
    total_items: int
    status: str
    created_at: datetime
    updated_at: datetime | None = None
    items: list[OrderItemDTO] = field(default_factory=list)


@dataclass(frozen=True)
class PageMetaDTO:
    total: int
    page: int
    last_page: int


@dataclass(frozen=True)
class OrderPageDTO:
    data: list[OrderDTO]
    meta: PageMetaDTO


def to_order_dto(
    order: Order,
    products: list[CatalogProduct] | None = None,
    *,
    with_items: bool = True,
) -> OrderDTO:
    """Map an Order to its DTO, naming items from *products* when given.

    Prices always come from the order itself, never from *products*.
    """
    names = {p.id: p.name for p in products or []}
    items = [
        OrderItemDTO(
            product_id=item.product_id,
            quantity=item.quantity.value,
            price=item.price.amount,
            name=names.get(item.product_id, item.name),
        )
        for item in order.items
    ] if with_items else []

    return OrderDTO(
        id=order.id,
        total_amount=order.total_amount.amount,
        total_items=order.total_items,
        status=order.status.value,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=items,
    )
