"""Product store backends."""

from .base import ProductStore
from .memory_store import InMemoryProductStore, InMemoryProductTable
from .sql_store import SqlProductStore

__all__ = [
    "InMemoryProductStore",
    "InMemoryProductTable",
    "ProductStore",
    "SqlProductStore",
]
