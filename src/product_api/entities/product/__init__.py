"""Entity package: Product."""

from .entity import DECIMAL_MAX, ProductDTO
from .mapper import product_to_dto
from .table import ProductTable
from .validation import ProductRules, validate_product

__all__ = [
    "DECIMAL_MAX",
    "ProductDTO",
    "ProductRules",
    "ProductTable",
    "product_to_dto",
    "validate_product",
]
