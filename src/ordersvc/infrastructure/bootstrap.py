"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from loguru import logger

from ordersvc.domain.repository.order_repository import OrderRepository
from ordersvc.domain.repository.product_catalog import ProductCatalog
from ordersvc.infrastructure.catalog.http_product_catalog import HttpProductCatalog
from ordersvc.infrastructure.config import Settings, settings
from ordersvc.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)


def setup_logging(level: str | None = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.log_level).upper())


def order_repository(config: Settings = settings) -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(config.database_url)


def product_catalog(config: Settings = settings) -> HttpProductCatalog:
    return HttpProductCatalog(config.products_url, timeout=config.products_timeout)


@dataclass(frozen=True)
class Services:
    orders: OrderRepository
    catalog: ProductCatalog


@asynccontextmanager
async def open_services(config: Settings = settings) -> AsyncIterator[Services]:
    """Open the order store and the catalog client for one command."""
    async with order_repository(config) as orders, product_catalog(config) as catalog:
        yield Services(orders=orders, catalog=catalog)
