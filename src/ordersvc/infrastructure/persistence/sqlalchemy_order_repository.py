"""SQLAlchemy-backed implementation of OrderRepository.

Owns its engine: ``open()`` connects and creates the tables,
``close()`` disposes the pool.  Every call runs in its own session, so
one repository can serve concurrent requests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import selectinload

from ordersvc.domain.exceptions import InternalError, NotFoundError
from ordersvc.domain.model.order import Order, OrderItem, OrderStatus
from ordersvc.domain.model.value_objects import Money, Quantity
from ordersvc.domain.repository.order_repository import OrderRepository, OrderSort
from ordersvc.infrastructure.persistence.models import (
    Base,
    OrderItemRecord,
    OrderRecord,
)


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, database_url: str, **engine_options: Any) -> None:
        self._database_url = database_url
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    # --- Lifecycle ------------------------------------------------------------

    async def open(self) -> None:
        if self._engine is not None:
            return
        self._ensure_sqlite_dir()
        engine = create_async_engine(
            self._database_url, pool_pre_ping=True, **self._engine_options
        )
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            await engine.dispose()
            logger.exception("Database connection failed")
            raise InternalError("Database unavailable") from exc

        self._engine = engine
        self._sessions = async_sessionmaker(bind=engine, expire_on_commit=False)
        logger.info("Database connected: {}", engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("Database disconnected")

    # --- OrderRepository interface --------------------------------------------

    async def create(self, order: Order) -> Order:
        record = self._to_record(order)
        try:
            async with self._session() as session, session.begin():
                session.add(record)
        except SQLAlchemyError as exc:
            logger.exception("Failed to persist order {}", order.id)
            raise InternalError("Could not save order") from exc
        return order

    async def count(self, status: OrderStatus | None = None) -> int:
        stmt = select(func.count()).select_from(OrderRecord)
        if status is not None:
            stmt = stmt.where(OrderRecord.status == status)
        try:
            async with self._session() as session:
                return (await session.scalar(stmt)) or 0
        except SQLAlchemyError as exc:
            logger.exception("Failed to count orders")
            raise InternalError("Could not count orders") from exc

    async def find_many(
        self,
        status: OrderStatus | None,
        skip: int,
        take: int,
        order_by: OrderSort = OrderSort.NEWEST_FIRST,
        *,
        with_items: bool = False,
    ) -> list[Order]:
        if order_by is OrderSort.NEWEST_FIRST:
            ordering = (OrderRecord.created_at.desc(), OrderRecord.id.desc())
        else:
            ordering = (OrderRecord.created_at.asc(), OrderRecord.id.asc())

        stmt = select(OrderRecord).order_by(*ordering).offset(skip).limit(take)
        if with_items:
            stmt = stmt.options(selectinload(OrderRecord.items))
        if status is not None:
            stmt = stmt.where(OrderRecord.status == status)

        try:
            async with self._session() as session:
                records = (await session.scalars(stmt)).all()
                return [self._to_domain(r, with_items=with_items) for r in records]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list orders")
            raise InternalError("Could not list orders") from exc

    async def find_by_id(self, order_id: str) -> Order | None:
        stmt = (
            select(OrderRecord)
            .options(selectinload(OrderRecord.items))
            .where(OrderRecord.id == order_id)
        )
        try:
            async with self._session() as session:
                record = await session.scalar(stmt)
                return self._to_domain(record) if record is not None else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to load order {}", order_id)
            raise InternalError("Could not load order") from exc

    async def update(self, order_id: str, *, status: OrderStatus) -> Order:
        try:
            async with self._session() as session, session.begin():
                record = await session.get(
                    OrderRecord, order_id, options=[selectinload(OrderRecord.items)]
                )
                if record is None:
                    raise NotFoundError(f"Order {order_id} not found")
                record.status = status
                record.updated_at = datetime.now(timezone.utc)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update order {}", order_id)
            raise InternalError("Could not update order") from exc
        return self._to_domain(record)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_record(order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.id,
            total_amount=order.total_amount.amount,
            total_items=order.total_items,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRecord(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    price=item.price.amount,
                )
                for item in order.items
            ],
        )

    @staticmethod
    def _to_domain(record: OrderRecord, *, with_items: bool = True) -> Order:
        # record.items is not loaded unless with_items
        items = [
            OrderItem(
                product_id=i.product_id,
                quantity=Quantity(i.quantity),
                price=Money.of(i.price),
            )
            for i in record.items
        ] if with_items else []
        return Order(
            id=record.id,
            items=items,
            total_amount=Money.of(record.total_amount),
            total_items=record.total_items,
            status=record.status,
            created_at=_as_utc(record.created_at),
            updated_at=_as_utc(record.updated_at) if record.updated_at else None,
        )

    # --- Session helpers ------------------------------------------------------

    def _session(self) -> AsyncSession:
        if self._sessions is None:
            raise InternalError("Order repository is not open")
        return self._sessions()

    def _ensure_sqlite_dir(self) -> None:
        url = make_url(self._database_url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
