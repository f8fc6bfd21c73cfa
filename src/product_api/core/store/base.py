"""Abstract unit-of-work over the product table.

Concrete backends (SQL, in-memory) live next to this module. The service
layer only talks to this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from src.product_api.entities.product import ProductTable


class ProductStore(ABC):
    """Tracks loaded products and pending changes until ``commit``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return whether the product table exists."""

    @abstractmethod
    def find(self, product_id: int) -> ProductTable | None:
        """Load a product by id and track it, or return None."""

    @abstractmethod
    def query_by_price(self, min_price: Decimal, max_price: Decimal) -> list[ProductTable]:
        """Return products with ``min_price <= price <= max_price``."""

    @abstractmethod
    def exists(self, product_id: int) -> bool:
        """Check committed state for a product id, ignoring tracked changes."""

    @abstractmethod
    def add(self, product: ProductTable) -> None:
        """Stage a new product; its id is assigned on commit."""

    @abstractmethod
    def remove(self, product: ProductTable) -> None:
        """Stage removal of a product previously returned by ``find``."""

    @abstractmethod
    def commit(self) -> None:
        """Persist staged changes atomically.

        Raises:
            ConcurrencyConflictError: a tracked product was modified or removed
                by someone else after it was loaded.
        """
