"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from src.product_api.core.services import DbSessionService, ProductService
from src.product_api.core.store import (
    InMemoryProductStore,
    InMemoryProductTable,
    SqlProductStore,
)
from src.product_api.entities.product import ProductTable
from src.product_api.runtime.context import get_config

console = Console()


@contextmanager
def product_service(
    memory: bool = False,
    products: list[ProductTable] | None = None,
) -> Iterator[ProductService]:
    """Open a ProductService on the configured database.

    With ``memory=True`` no database is touched: the service runs against a
    throwaway in-memory table holding ``products``.
    """
    validation_enabled = get_config().products.validation_enabled
    if memory:
        yield ProductService(
            InMemoryProductStore(InMemoryProductTable(products)),
            validation_enabled=validation_enabled,
        )
        return

    database_service = DbSessionService()
    try:
        with database_service.get_session() as session:
            yield ProductService(
                SqlProductStore(session),
                validation_enabled=validation_enabled,
            )
    finally:
        database_service.engine.dispose()
