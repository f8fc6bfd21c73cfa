"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Transfer model exposed on the wire
- table.py: Database persistence model
- mapper.py: Conversion from table rows to transfer models
- validation.py: Field rules checked before anything is stored
"""

from .product import ProductDTO, ProductTable, product_to_dto

__all__ = ["ProductDTO", "ProductTable", "product_to_dto"]
