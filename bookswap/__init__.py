"""Catalog core for the BookSwap exchange platform."""
from .errors import (
    CatalogError,
    DuplicateError,
    NotFoundError,
    StoreError,
    UnavailableError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "DuplicateError",
    "NotFoundError",
    "StoreError",
    "UnavailableError",
    "ValidationError",
]
