"""Application service: Show Order use case (query).

Product names are looked up again on every read.  Ids the catalog no
longer knows keep ``name=None``; the stored price is never touched.
"""

from __future__ import annotations

from loguru import logger

from ordersvc.application.dto import OrderDTO, to_order_dto
from ordersvc.domain.exceptions import NotFoundError
from ordersvc.domain.repository.order_repository import OrderRepository
from ordersvc.domain.repository.product_catalog import ProductCatalog


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog

    async def handle(self, order_id: str) -> OrderDTO:
        order = await self._order_repo.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        product_ids = order.product_ids
        products = await self._catalog.validate_products(product_ids)

        known = {p.id for p in products}
        unknown = [pid for pid in product_ids if pid not in known]
        if unknown:
            logger.warning(
                "Order {}: catalog no longer lists {}", order_id, ", ".join(unknown)
            )

        return to_order_dto(order, products)
