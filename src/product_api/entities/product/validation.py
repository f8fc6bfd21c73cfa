"""Field rules for products.

The rules are declared on a pydantic model and checked against a ProductDTO
before the service touches the store, so they work the same for HTTP
requests, the CLI and direct service calls.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .entity import ProductDTO


class ProductRules(BaseModel):
    """Constraints a product must satisfy to be stored."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name must not be blank")
        return value


def validate_product(product: ProductDTO) -> list[dict[str, Any]]:
    """Return the rule violations for ``product``; an empty list means valid."""
    try:
        ProductRules.model_validate(product.model_dump(include={"name", "price"}))
    except ValidationError as exc:
        return [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in exc.errors()
        ]
    return []
