"""Read-side catalog queries for the gallery.

Every function here is side-effect free. Owner details are joined in the
same statement as the listings, so a dangling ``owner_id`` simply yields a
listing without an owner.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import asyncpg

from bookswap.db.connection import connection
from bookswap.models.book_model import UPLOAD_PREFIX, BookListing
from bookswap.utils.validation import check_limit

DEFAULT_LIMIT = 10
UNKNOWN_GENRE = "Unknown"

_LISTING_SQL = """
    SELECT b.*, u.username AS owner_username, u.location AS owner_location
    FROM books b
    LEFT JOIN users u ON u.id = b.owner_id
    {where}
    ORDER BY b.created_at DESC, b.seq ASC
    LIMIT $1
"""

_UPLOADED_FILTER = "WHERE lower(left(b.image, length($2::text))) = lower($2::text)"

_GENRE_COUNTS_SQL = """
    SELECT COALESCE(NULLIF(genre, ''), $1::text) AS label, COUNT(*) AS count
    FROM books
    GROUP BY 1
"""


@dataclass
class GallerySummary:
    total_books: int
    recent: List[BookListing] = field(default_factory=list)
    uploaded: List[BookListing] = field(default_factory=list)
    genre_counts: Dict[str, int] = field(default_factory=dict)


def order_genre_counts(rows: Iterable[Tuple[str, int]]) -> Dict[str, int]:
    """Count descending, then label ascending."""
    return dict(sorted(rows, key=lambda item: (-item[1], item[0])))


async def _fetch_listings(
    conn: asyncpg.Connection,
    limit: Optional[int],
    uploaded_only: bool = False,
) -> List[BookListing]:
    if uploaded_only:
        query = _LISTING_SQL.format(where=_UPLOADED_FILTER)
        records = await conn.fetch(query, limit, UPLOAD_PREFIX)
    else:
        records = await conn.fetch(_LISTING_SQL.format(where=""), limit)
    return [BookListing.from_db_record(r) for r in records]


async def _fetch_genre_counts(conn: asyncpg.Connection) -> Dict[str, int]:
    records = await conn.fetch(_GENRE_COUNTS_SQL, UNKNOWN_GENRE)
    return order_genre_counts((r["label"], r["count"]) for r in records)


async def list_books(limit: Optional[int] = DEFAULT_LIMIT) -> List[BookListing]:
    """Most recent listings first, each with its owner's username and location.

    ``limit=None`` returns every listing.
    """
    limit = check_limit(limit)
    async with connection() as conn:
        return await _fetch_listings(conn, limit)


async def list_uploaded_images(limit: Optional[int] = DEFAULT_LIMIT) -> List[BookListing]:
    """Listings whose image is hosted on the platform, ordered like :func:`list_books`."""
    limit = check_limit(limit)
    async with connection() as conn:
        return await _fetch_listings(conn, limit, uploaded_only=True)


async def count_by_genre() -> Dict[str, int]:
    """Listing count per genre; missing or empty genres count as ``Unknown``."""
    async with connection() as conn:
        return await _fetch_genre_counts(conn)


async def gallery_summary(
    limit: Optional[int] = DEFAULT_LIMIT,
    uploads_limit: Optional[int] = 5,
) -> GallerySummary:
    """Everything the gallery page needs, read from one snapshot."""
    limit = check_limit(limit)
    uploads_limit = check_limit(uploads_limit)
    async with connection() as conn:
        async with conn.transaction(isolation="repeatable_read", readonly=True):
            total = await conn.fetchval("SELECT COUNT(*) FROM books")
            recent = await _fetch_listings(conn, limit)
            uploaded = await _fetch_listings(conn, uploads_limit, uploaded_only=True)
            genre_counts = await _fetch_genre_counts(conn)
    return GallerySummary(
        total_books=total,
        recent=recent,
        uploaded=uploaded,
        genre_counts=genre_counts,
    )
