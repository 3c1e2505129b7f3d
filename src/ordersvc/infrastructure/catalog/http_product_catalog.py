"""HTTP implementation of ProductCatalog on top of httpx.

The product service answers ``POST /products/validate`` with the
records it knows among the ids it was sent.  Anything short of a clean
2xx JSON list is reported as a DependencyError.
"""

from __future__ import annotations

import httpx
from loguru import logger

from ordersvc.domain.exceptions import DependencyError, ValidationError
from ordersvc.domain.model.product import CatalogProduct
from ordersvc.domain.model.value_objects import Money
from ordersvc.domain.repository.product_catalog import ProductCatalog

VALIDATE_PATH = "/products/validate"


class HttpProductCatalog(ProductCatalog):

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def validate_products(self, product_ids: list[str]) -> list[CatalogProduct]:
        try:
            resp = await self._client.post(VALIDATE_PATH, json={"ids": list(product_ids)})
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Product catalog answered {} for {}",
                exc.response.status_code, product_ids,
            )
            raise DependencyError("Product validation failed") from exc
        except httpx.HTTPError as exc:
            logger.error("Product catalog unreachable: {}", exc)
            raise DependencyError("Product catalog unavailable") from exc
        except ValueError as exc:
            logger.error("Product catalog sent invalid JSON: {}", exc)
            raise DependencyError("Product catalog sent an invalid response") from exc

        return self._parse(payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpProductCatalog:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @staticmethod
    def _parse(payload: object) -> list[CatalogProduct]:
        if not isinstance(payload, list):
            raise DependencyError("Product catalog sent an invalid response")
        try:
            return [
                CatalogProduct(
                    id=str(raw["id"]),
                    name=raw["name"],
                    price=Money.of(raw["price"]),
                )
                for raw in payload
            ]
        except (KeyError, TypeError, ValidationError) as exc:
            logger.error("Malformed product record from catalog: {}", exc)
            raise DependencyError("Product catalog sent an invalid response") from exc
