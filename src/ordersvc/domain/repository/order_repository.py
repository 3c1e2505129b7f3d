"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from ordersvc.domain.model.order import Order, OrderStatus


class OrderSort(Enum):
    """Ordering for paged reads; ties on ``created_at`` break on ``id``."""

    NEWEST_FIRST = "desc"
    OLDEST_FIRST = "asc"


class OrderRepository(ABC):

    async def open(self) -> None:
        """Acquire backing resources.  No-op by default."""

    async def close(self) -> None:
        """Release backing resources.  No-op by default."""

    async def __aenter__(self) -> OrderRepository:
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Persist a new order and all of its items in one transaction."""

    @abstractmethod
    async def count(self, status: OrderStatus | None = None) -> int:
        """Return how many orders match the optional status filter."""

    @abstractmethod
    async def find_many(
        self,
        status: OrderStatus | None,
        skip: int,
        take: int,
        order_by: OrderSort = OrderSort.NEWEST_FIRST,
        *,
        with_items: bool = False,
    ) -> list[Order]:
        """Return one page of orders, sorted by creation time.

        Items are only loaded when *with_items* is set; otherwise each
        order comes back with an empty item list.
        """

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    async def update(self, order_id: str, *, status: OrderStatus) -> Order:
        """Change the status of an order and return it.

        Raises NotFoundError if the order does not exist.
        """
