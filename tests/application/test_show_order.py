"""Integration tests for the ShowOrder use case."""

from decimal import Decimal

import pytest

from ordersvc.application.create_order import CreateOrderHandler
from ordersvc.application.dto import OrderItemSpec
from ordersvc.application.show_order import ShowOrderHandler
from ordersvc.domain.exceptions import DependencyError, NotFoundError
from ordersvc.domain.model.product import CatalogProduct
from ordersvc.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductCatalog


def _setup():
    products = [
        CatalogProduct(id="p-1", name="Widget", price=Money.of("10.00")),
        CatalogProduct(id="p-2", name="Gadget", price=Money.of("25.00")),
    ]
    order_repo = FakeOrderRepository()
    catalog = FakeProductCatalog(products)
    return order_repo, catalog


async def _create(order_repo, catalog, items):
    dto = await CreateOrderHandler(order_repo, catalog).handle(items)
    return dto.id


class TestShowOrder:

    async def test_returns_order_with_named_items(self):
        order_repo, catalog = _setup()
        oid = await _create(order_repo, catalog, [OrderItemSpec("p-1", 2), OrderItemSpec("p-2", 1)])

        dto = await ShowOrderHandler(order_repo, catalog).handle(oid)

        assert dto.id == oid
        assert dto.total_amount == Decimal("45.00")
        assert [i.name for i in dto.items] == ["Widget", "Gadget"]

    async def test_nonexistent_order_rejected(self):
        order_repo, catalog = _setup()
        with pytest.raises(NotFoundError, match="not found"):
            await ShowOrderHandler(order_repo, catalog).handle("nonexistent-id")

    async def test_price_not_refreshed_from_catalog(self):
        order_repo, catalog = _setup()
        oid = await _create(order_repo, catalog, [OrderItemSpec("p-1", 1)])

        catalog.set_price("p-1", "20.00")
        dto = await ShowOrderHandler(order_repo, catalog).handle(oid)

        assert dto.items[0].price == Decimal("10.00")
        assert dto.total_amount == Decimal("10.00")

    async def test_each_read_asks_the_catalog_again(self):
        order_repo, catalog = _setup()
        oid = await _create(order_repo, catalog, [OrderItemSpec("p-1", 1), OrderItemSpec("p-1", 3)])
        catalog.calls.clear()

        handler = ShowOrderHandler(order_repo, catalog)
        await handler.handle(oid)
        await handler.handle(oid)

        assert catalog.calls == [["p-1"], ["p-1"]]


class TestShowOrderEnrichment:

    async def test_product_dropped_from_catalog_leaves_name_empty(self):
        order_repo, catalog = _setup()
        oid = await _create(order_repo, catalog, [OrderItemSpec("p-1", 1), OrderItemSpec("p-2", 1)])

        catalog.remove("p-2")
        dto = await ShowOrderHandler(order_repo, catalog).handle(oid)

        assert dto.items[0].name == "Widget"
        assert dto.items[1].name is None
        assert dto.items[1].price == Decimal("25.00")

    async def test_catalog_failure_propagates(self):
        order_repo, catalog = _setup()
        oid = await _create(order_repo, catalog, [OrderItemSpec("p-1", 1)])

        catalog.fail = True
        with pytest.raises(DependencyError):
            await ShowOrderHandler(order_repo, catalog).handle(oid)
