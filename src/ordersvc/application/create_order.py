"""Application service: Create Order use case.

Orchestrates the flow between the product catalog, the Order aggregate
and the repository.  Nothing is written until every requested product
has been confirmed by the catalog.
"""

from __future__ import annotations

from loguru import logger

from ordersvc.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from ordersvc.domain.exceptions import ValidationError
from ordersvc.domain.model.order import Order, OrderItem
from ordersvc.domain.model.value_objects import Quantity
from ordersvc.domain.repository.order_repository import OrderRepository
from ordersvc.domain.repository.product_catalog import ProductCatalog


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog

    async def handle(self, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Create a new purchase order.

        Steps:
        1. Check quantities, then ask the catalog about the distinct ids.
        2. Build OrderItems with the catalog's *current* prices (snapshot).
        3. Let the Order aggregate derive its totals.
        4. Persist order and items together, then return a named DTO.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        product_ids = list(dict.fromkeys(spec.product_id for spec in item_specs))
        products = await self._catalog.validate_products(product_ids)
        by_id = {product.id: product for product in products}

        missing = [pid for pid in product_ids if pid not in by_id]
        if missing:
            raise ValidationError(f"Products not found: {', '.join(missing)}")

        items = [
            OrderItem(
                product_id=spec.product_id,
                quantity=qty,
                price=by_id[spec.product_id].price,  # <-- price snapshot
            )
            for spec, qty in zip(item_specs, quantities)
        ]

        order = Order.create(items)
        await self._order_repo.create(order)
        logger.info(
            "Order {} created: {} items, total {}",
            order.id, order.total_items, order.total_amount,
        )

        return to_order_dto(order, products)
