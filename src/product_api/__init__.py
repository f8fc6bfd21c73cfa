"""Product catalog HTTP API.

FastAPI service exposing CRUD operations on products stored through
SQLModel, with loguru logging and YAML-based configuration.
"""

__version__ = "0.1.0"
