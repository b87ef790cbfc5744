"""Book models."""
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from .user_model import OwnerSummary

# Images stored on the platform itself live under this path.
UPLOAD_PREFIX = "/uploads/"

# publish_year is stored as BIGINT
PUBLISH_YEAR_MIN = -(2**63)
PUBLISH_YEAR_MAX = 2**63 - 1


class ExchangeType(str, Enum):
    DONATE = "Donate"
    SWAP = "Swap"


def format_rating(average: float, total: int) -> str:
    """Average rounded to one decimal, ``"0.0"`` when unrated."""
    if total <= 0:
        return "0.0"
    return f"{average:.1f}"


def is_uploaded_image(image: Optional[str], prefix: str = UPLOAD_PREFIX) -> bool:
    """True when ``image`` is a platform-hosted path (case-insensitive prefix match)."""
    if not image:
        return False
    return image[: len(prefix)].lower() == prefix.lower()


class BookCreate(BaseModel):
    """Fields a member supplies when listing a book.

    Rating aggregates are not accepted here; see :class:`BookSeed`.
    """

    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    type: ExchangeType
    owner_id: UUID
    genre: Optional[str] = None
    condition: Optional[str] = None
    location: Optional[str] = None
    contact: Optional[str] = None
    description: Optional[str] = None
    # negative years are legal (BCE)
    publish_year: Optional[int] = Field(default=None, ge=PUBLISH_YEAR_MIN, le=PUBLISH_YEAR_MAX)
    image: Optional[str] = None

    model_config = {"extra": "forbid"}


class BookSeed(BookCreate):
    """Bulk-load record carrying pre-computed rating aggregates."""

    average_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    total_ratings: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_aggregates(self) -> "BookSeed":
        if self.total_ratings == 0 and self.average_rating != 0.0:
            raise ValueError("average_rating must be 0 when total_ratings is 0")
        return self


class Book(BaseModel):
    id: UUID
    title: str
    author: str
    type: ExchangeType
    owner_id: UUID
    genre: Optional[str] = None
    condition: Optional[str] = None
    location: Optional[str] = None
    contact: Optional[str] = None
    description: Optional[str] = None
    average_rating: float = 0.0
    total_ratings: int = 0
    publish_year: Optional[int] = None
    image: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_db_record(cls, record: Mapping) -> "Book":
        return cls.model_validate(dict(record))

    def rating_label(self) -> str:
        return format_rating(self.average_rating, self.total_ratings)

    def genre_label(self) -> str:
        return self.genre or "N/A"

    def image_label(self) -> str:
        return self.image or "No image"

    def has_uploaded_image(self) -> bool:
        return is_uploaded_image(self.image)


class BookListing(Book):
    """A book as shown in the gallery, with its owner's public details."""

    owner: Optional[OwnerSummary] = None

    @classmethod
    def from_db_record(cls, record: Mapping) -> "BookListing":
        data = dict(record)
        username = data.pop("owner_username", None)
        location = data.pop("owner_location", None)
        owner = OwnerSummary(username=username, location=location or "") if username is not None else None
        return cls.model_validate({**data, "owner": owner})

    def owner_label(self) -> str:
        return self.owner.username if self.owner else "No owner"


class RatingAggregate(BaseModel):
    book_id: UUID
    average_rating: float
    total_ratings: int

    model_config = {"from_attributes": True}

    def rating_label(self) -> str:
        return format_rating(self.average_rating, self.total_ratings)
