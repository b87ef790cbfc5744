"""Rating aggregation.

Only the running aggregate (``average_rating``, ``total_ratings``) is stored.
Each new rating folds into it with a single conditional UPDATE, so the
read-modify-write happens under the row lock and concurrent ratings on the
same book are all counted.
"""
import math
from numbers import Real
from typing import Tuple, Union
from uuid import UUID

from bookswap.db.connection import connection
from bookswap.errors import NotFoundError, ValidationError
from bookswap.models.book_model import RatingAggregate
from bookswap.utils.validation import as_uuid

MIN_RATING = 1
MAX_RATING = 5

APPLY_RATING_SQL = """
    UPDATE books
    SET average_rating = (average_rating * total_ratings + $2::double precision) / (total_ratings + 1),
        total_ratings = total_ratings + 1
    WHERE id = $1
    RETURNING id AS book_id, average_rating, total_ratings
"""


def validate_rating(value: Union[int, float]) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"Rating must be a number, got {value!r}")
    rating = float(value)
    if math.isnan(rating) or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {value!r}")
    return rating


def next_aggregate(average: float, total: int, value: float) -> Tuple[float, int]:
    """Fold one rating into an existing (average, total) pair."""
    new_total = total + 1
    return (average * total + value) / new_total, new_total


async def apply_rating(book_id: Union[str, UUID], value: Union[int, float]) -> RatingAggregate:
    """Record one rating for a book and return the updated aggregate."""
    rating = validate_rating(value)
    bid = as_uuid(book_id, "book_id")
    async with connection() as conn:
        record = await conn.fetchrow(APPLY_RATING_SQL, bid, rating)
    if record is None:
        raise NotFoundError(f"Book {bid} not found")
    return RatingAggregate.model_validate(dict(record))
