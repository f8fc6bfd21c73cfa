"""Mapping from persisted rows to transfer models."""

from .entity import ProductDTO
from .table import ProductTable


def product_to_dto(product: ProductTable) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
    )
