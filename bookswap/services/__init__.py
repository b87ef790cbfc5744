"""Services package."""
from . import (
    admin_service,
    book_service,
    catalog_service,
    rating_service,
    user_service,
)

__all__ = [
    "admin_service",
    "book_service",
    "catalog_service",
    "rating_service",
    "user_service",
]
