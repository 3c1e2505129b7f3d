"""Application service: Change Order Status use case.

There is no transition table: any status may follow any other.
Asking for the status the order already has is a successful no-op and
does not write.
"""

from __future__ import annotations

import dataclasses

from loguru import logger

from ordersvc.application.dto import OrderDTO
from ordersvc.application.show_order import ShowOrderHandler
from ordersvc.domain.model.order import OrderStatus
from ordersvc.domain.repository.order_repository import OrderRepository
from ordersvc.domain.repository.product_catalog import ProductCatalog


class ChangeOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
    ) -> None:
        self._order_repo = order_repo
        self._show = ShowOrderHandler(order_repo, catalog)

    async def handle(self, order_id: str, status: OrderStatus) -> OrderDTO:
        current = await self._show.handle(order_id)
        if current.status == status.value:
            return current

        updated = await self._order_repo.update(order_id, status=status)
        logger.info("Order {} status {} -> {}", order_id, current.status, status.value)

        # items and names are unchanged by a status write
        return dataclasses.replace(
            current,
            status=updated.status.value,
            updated_at=updated.updated_at,
        )
