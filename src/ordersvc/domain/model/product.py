"""Catalog product as reported by the product service.

Products are not owned here; this record is only what the catalog
returns when asked to validate a batch of ids.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordersvc.domain.model.value_objects import Money


@dataclass(frozen=True)
class CatalogProduct:
    id: str
    name: str
    price: Money
