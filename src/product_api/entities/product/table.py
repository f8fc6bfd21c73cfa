"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field, SQLModel


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    ``id`` stays ``None`` until the store assigns one on insert.
    """

    __tablename__ = "product"

    id: int | None = Field(default=None, primary_key=True)
    name: str | None = None
    description: str | None = None
    price: Decimal = Field(default=Decimal(0), max_digits=18, decimal_places=2, index=True)
