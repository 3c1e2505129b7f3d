"""Abstract port to the external product catalog.

Defined in the domain layer so the workflow never depends on the
transport.  The catalog may answer with fewer products than asked for;
an id it leaves out is an unknown product.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordersvc.domain.model.product import CatalogProduct


class ProductCatalog(ABC):

    @abstractmethod
    async def validate_products(self, product_ids: list[str]) -> list[CatalogProduct]:
        """Return the catalog records for the given ids.

        Raises DependencyError when the catalog cannot be consulted.
        """
