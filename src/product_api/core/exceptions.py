"""Product domain exceptions.

Raised by the service layer and the product stores. The API layer catches
these and translates them into HTTP responses.
"""

from __future__ import annotations

from typing import Any


class ProductError(Exception):
    """Base class for product resource errors."""


class ProductNotFoundError(ProductError):
    """No product with the requested id exists."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ProductIdMismatchError(ProductError):
    """The id in the request path differs from the id in the body."""

    def __init__(self, path_id: int, body_id: int) -> None:
        super().__init__(
            f"Path id {path_id} does not match body id {body_id}"
        )
        self.path_id = path_id
        self.body_id = body_id


class ProductValidationError(ProductError):
    """The product failed field validation."""

    def __init__(self, issues: list[dict[str, Any]]) -> None:
        super().__init__("Product failed validation")
        self.issues = issues


class StoreUnavailableError(ProductError):
    """The product table or collection has not been initialized."""


class ConcurrencyConflictError(ProductError):
    """A tracked row changed or disappeared between load and commit."""
