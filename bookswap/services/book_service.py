"""Book service helpers."""
from typing import Union
from uuid import UUID

from bookswap.db.connection import connection
from bookswap.errors import NotFoundError
from bookswap.models.book_model import Book, BookCreate
from bookswap.utils.validation import as_uuid, validate_input

# Inserts only when the owner exists, so the check and the write are one statement.
INSERT_BOOK_SQL = """
    INSERT INTO books (
        title, author, genre, condition, type, location, contact,
        owner_id, description, publish_year, image
    )
    SELECT $1::text, $2::text, $3::text, $4::text, $5::text, $6::text, $7::text,
           $8::uuid, $9::text, $10::bigint, $11::text
    WHERE EXISTS (SELECT 1 FROM users WHERE id = $8::uuid)
    RETURNING *
"""


def insert_args(book: BookCreate) -> tuple:
    return (
        book.title,
        book.author,
        book.genre,
        book.condition,
        book.type.value,
        book.location,
        book.contact,
        book.owner_id,
        book.description,
        book.publish_year,
        book.image,
    )


async def create_book(fields: Union[BookCreate, dict]) -> Book:
    """Create a listing with empty rating aggregates.

    Raises ``ValidationError`` for bad input (nothing is written) and
    ``NotFoundError`` when ``owner_id`` does not reference a user.
    """
    book_in = validate_input(BookCreate, fields)
    async with connection() as conn:
        record = await conn.fetchrow(INSERT_BOOK_SQL, *insert_args(book_in))
    if record is None:
        raise NotFoundError(f"User {book_in.owner_id} not found")
    return Book.from_db_record(record)


async def get_book(book_id: Union[str, UUID]) -> Book:
    bid = as_uuid(book_id, "book_id")
    async with connection() as conn:
        record = await conn.fetchrow("SELECT * FROM books WHERE id=$1", bid)
    if record is None:
        raise NotFoundError(f"Book {bid} not found")
    return Book.from_db_record(record)


async def count_books() -> int:
    """Total number of listings in the catalog."""
    async with connection() as conn:
        return await conn.fetchval("SELECT COUNT(*) FROM books")
