"""Entity: Product transfer model."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

# Largest value a price filter may take when no upper bound is given
DECIMAL_MAX = Decimal("79228162514264337593543950335")

Price = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class ProductDTO(BaseModel):
    """Wire-facing shape of a product used in request and response bodies.

    It mirrors ProductTable field for field so the HTTP contract can evolve
    separately from the table. Field rules are kept in validation.py and are
    not enforced by this model.
    """

    id: int = Field(default=0, description="Store-assigned identifier")
    name: str | None = Field(default=None, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Price = Field(default=Decimal(0), description="Unit price")
