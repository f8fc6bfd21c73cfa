"""Product store kept in process memory.

Several ``InMemoryProductStore`` units of work can share one
``InMemoryProductTable``, which makes it possible to reproduce the
load/commit races the SQL backend reports as stale data.
"""

from __future__ import annotations

from decimal import Decimal

from loguru import logger

from src.product_api.core.exceptions import (
    ConcurrencyConflictError,
    StoreUnavailableError,
)
from src.product_api.entities.product import ProductTable

from .base import ProductStore


def _copy(product: ProductTable) -> ProductTable:
    return ProductTable(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
    )


def _snapshot(product: ProductTable) -> tuple:
    return (product.name, product.description, product.price)


class InMemoryProductTable:
    """Committed product rows plus the id sequence."""

    def __init__(self, products: list[ProductTable] | None = None) -> None:
        self.rows: dict[int, ProductTable] = {}
        self._last_id = 0
        for product in products or []:
            self.insert(_copy(product))

    def next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def insert(self, product: ProductTable) -> None:
        if product.id is None:
            product.id = self.next_id()
        elif product.id in self.rows:
            raise ValueError(f"Duplicate product id {product.id}")
        self._last_id = max(self._last_id, product.id)
        self.rows[product.id] = product


class InMemoryProductStore(ProductStore):
    """Unit of work over an ``InMemoryProductTable``.

    Passing ``table=None`` models a store whose product collection was never
    initialized.
    """

    def __init__(self, table: InMemoryProductTable | None) -> None:
        self._table = table
        self._tracked: dict[int, tuple[ProductTable, tuple]] = {}
        self._added: list[ProductTable] = []
        self._removed: dict[int, ProductTable] = {}

    def _rows(self) -> dict[int, ProductTable]:
        if self._table is None:
            raise StoreUnavailableError("Product collection is not initialized")
        return self._table.rows

    def _track(self, product: ProductTable) -> ProductTable:
        tracked = self._tracked.get(product.id)
        if tracked is not None:
            return tracked[0]
        loaded = _copy(product)
        self._tracked[loaded.id] = (loaded, _snapshot(loaded))
        return loaded

    def is_available(self) -> bool:
        return self._table is not None

    def find(self, product_id: int) -> ProductTable | None:
        if product_id in self._removed:
            return None
        row = self._rows().get(product_id)
        return self._track(row) if row is not None else None

    def query_by_price(self, min_price: Decimal, max_price: Decimal) -> list[ProductTable]:
        return [
            self._track(row)
            for row in self._rows().values()
            if min_price <= row.price <= max_price and row.id not in self._removed
        ]

    def exists(self, product_id: int) -> bool:
        return product_id in self._rows()

    def add(self, product: ProductTable) -> None:
        self._rows()
        self._added.append(product)

    def remove(self, product: ProductTable) -> None:
        if product.id not in self._tracked:
            raise ValueError(f"Product {product.id} is not tracked by this store")
        self._removed[product.id] = product

    def commit(self) -> None:
        rows = self._rows()

        updated = [
            loaded
            for product_id, (loaded, snapshot) in self._tracked.items()
            if product_id not in self._removed and _snapshot(loaded) != snapshot
        ]
        missing = [
            product.id
            for product in (*updated, *self._removed.values())
            if product.id not in rows
        ]
        if missing:
            self._discard()
            logger.warning("Products {} disappeared before commit", missing)
            raise ConcurrencyConflictError(
                f"Expected to modify products {missing}; they no longer exist"
            )

        for product in updated:
            rows[product.id] = _copy(product)
        for product_id in self._removed:
            del rows[product_id]
        for product in self._added:
            product.id = self._table.next_id()
            rows[product.id] = _copy(product)

        self._discard()

    def _discard(self) -> None:
        self._tracked.clear()
        self._added.clear()
        self._removed.clear()
