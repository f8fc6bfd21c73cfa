"""Product store backed by a SQLModel session."""

from __future__ import annotations

from decimal import Decimal

from loguru import logger
from sqlalchemy import delete, inspect
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select

from src.product_api.core.exceptions import ConcurrencyConflictError
from src.product_api.entities.product import ProductTable

from .base import ProductStore


class SqlProductStore(ProductStore):
    """Data-access layer for products on a relational database.

    Removals are issued as explicit DELETE statements on commit so that a row
    deleted by someone else in the meantime is reported as a conflict, the
    same way SQLAlchemy reports an UPDATE that matched no rows.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._removed: list[ProductTable] = []

    def is_available(self) -> bool:
        return inspect(self._session.get_bind()).has_table(ProductTable.__tablename__)

    def find(self, product_id: int) -> ProductTable | None:
        if any(product.id == product_id for product in self._removed):
            return None
        return self._session.get(ProductTable, product_id)

    def query_by_price(self, min_price: Decimal, max_price: Decimal) -> list[ProductTable]:
        statement = select(ProductTable).where(
            (ProductTable.price >= min_price) & (ProductTable.price <= max_price)
        )
        removed_ids = {product.id for product in self._removed}
        return [
            product
            for product in self._session.exec(statement).all()
            if product.id not in removed_ids
        ]

    def exists(self, product_id: int) -> bool:
        statement = select(ProductTable.id).where(ProductTable.id == product_id)
        return self._session.exec(statement).first() is not None

    def add(self, product: ProductTable) -> None:
        self._session.add(product)

    def remove(self, product: ProductTable) -> None:
        self._removed.append(product)

    def _delete_row(self, product: ProductTable) -> None:
        statement = (
            delete(ProductTable)
            .where(ProductTable.id == product.id)
            .execution_options(synchronize_session=False)
        )
        result = self._session.exec(statement)
        if result.rowcount != 1:
            raise StaleDataError(
                f"DELETE statement on table '{ProductTable.__tablename__}' expected "
                f"to delete 1 row(s); {result.rowcount} were matched."
            )

    def commit(self) -> None:
        removed, self._removed = self._removed, []
        try:
            for product in removed:
                self._delete_row(product)
            self._session.commit()
        except StaleDataError as e:
            self._session.rollback()
            logger.warning("Product commit hit a concurrency conflict: {}", e)
            raise ConcurrencyConflictError(str(e)) from e
        except Exception:
            self._session.rollback()
            raise

        for product in removed:
            if product in self._session:
                self._session.expunge(product)
