"""Application service: List Orders use case (query)."""

from __future__ import annotations

from ordersvc.application.dto import OrderPageDTO, PageMetaDTO, to_order_dto
from ordersvc.application.pagination import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    check_window,
    paginate,
)
from ordersvc.domain.model.order import OrderStatus
from ordersvc.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        status: OrderStatus | None = None,
    ) -> OrderPageDTO:
        """Return one page of orders, most recent first.

        Rows carry totals and status only; items are left out of listings.
        """
        check_window(page, limit)

        total = await self._order_repo.count(status)
        window = paginate(page, limit, total)
        orders = await self._order_repo.find_many(status, window.skip, window.take)

        return OrderPageDTO(
            data=[to_order_dto(order, with_items=False) for order in orders],
            meta=PageMetaDTO(total=total, page=page, last_page=window.last_page),
        )
