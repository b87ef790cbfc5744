"""Pydantic models for the catalog."""
from .book_model import (
    UPLOAD_PREFIX,
    Book,
    BookCreate,
    BookListing,
    BookSeed,
    ExchangeType,
    RatingAggregate,
    is_uploaded_image,
)
from .user_model import OwnerSummary, User, UserCreate
