"""Tests for HttpProductCatalog against an httpx.MockTransport."""

import json

import httpx
import pytest

from ordersvc.domain.exceptions import DependencyError
from ordersvc.domain.model.value_objects import Money
from ordersvc.infrastructure.catalog.http_product_catalog import HttpProductCatalog


def _catalog(handler) -> HttpProductCatalog:
    client = httpx.AsyncClient(
        base_url="http://catalog.test", transport=httpx.MockTransport(handler)
    )
    return HttpProductCatalog("http://catalog.test", client=client)


class TestValidateProducts:

    async def test_posts_ids_and_parses_records(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[
                {"id": "p-1", "name": "Widget", "price": 15.5},
                {"id": "p-2", "name": "Gadget", "price": "25.00"},
            ])

        async with _catalog(handler) as catalog:
            products = await catalog.validate_products(["p-1", "p-2"])

        assert seen == {
            "method": "POST",
            "path": "/products/validate",
            "body": {"ids": ["p-1", "p-2"]},
        }
        assert [(p.id, p.name, p.price) for p in products] == [
            ("p-1", "Widget", Money.of("15.50")),
            ("p-2", "Gadget", Money.of("25.00")),
        ]

    async def test_subset_is_returned_as_is(self):
        def handler(request):
            return httpx.Response(200, json=[{"id": "p-1", "name": "Widget", "price": 1}])

        async with _catalog(handler) as catalog:
            products = await catalog.validate_products(["p-1", "p-404"])

        assert [p.id for p in products] == ["p-1"]

    async def test_numeric_ids_become_strings(self):
        def handler(request):
            return httpx.Response(200, json=[{"id": 7, "name": "Seven", "price": 7}])

        async with _catalog(handler) as catalog:
            products = await catalog.validate_products(["7"])

        assert products[0].id == "7"


class TestValidateProductsFailures:

    async def test_error_status_raises_dependency_error(self):
        def handler(request):
            return httpx.Response(400, json={"message": "Some products were not found"})

        async with _catalog(handler) as catalog:
            with pytest.raises(DependencyError, match="validation failed"):
                await catalog.validate_products(["p-1"])

    async def test_transport_error_raises_dependency_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _catalog(handler) as catalog:
            with pytest.raises(DependencyError, match="unavailable"):
                await catalog.validate_products(["p-1"])

    async def test_timeout_raises_dependency_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with _catalog(handler) as catalog:
            with pytest.raises(DependencyError, match="unavailable"):
                await catalog.validate_products(["p-1"])

    async def test_invalid_json_raises_dependency_error(self):
        def handler(request):
            return httpx.Response(200, content=b"not json")

        async with _catalog(handler) as catalog:
            with pytest.raises(DependencyError, match="invalid response"):
                await catalog.validate_products(["p-1"])

    @pytest.mark.parametrize("payload", [
        {"id": "p-1"},
        [{"id": "p-1", "name": "Widget"}],
        [{"id": "p-1", "name": "Widget", "price": "free"}],
        [{"id": "p-1", "name": "Widget", "price": -1}],
        ["p-1"],
    ])
    async def test_malformed_payload_raises_dependency_error(self, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        async with _catalog(handler) as catalog:
            with pytest.raises(DependencyError, match="invalid response"):
                await catalog.validate_products(["p-1"])
