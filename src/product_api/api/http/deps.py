"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.product_api.api.http.app_data import ApplicationDependencies
from src.product_api.core.services import ProductService
from src.product_api.core.store import ProductStore, SqlProductStore
from src.product_api.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that lives for one request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    with app_deps.database_service.get_session() as session:
        yield session


def get_product_store(db: Session = Depends(get_db_session)) -> ProductStore:
    """Get the product store for the current request."""
    return SqlProductStore(db)


def get_product_service(
    store: ProductStore = Depends(get_product_store),
) -> ProductService:
    """Get the product service for the current request."""
    return ProductService(
        store, validation_enabled=get_config().products.validation_enabled
    )
