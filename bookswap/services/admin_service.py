"""Administrative catalog operations.

These bypass the normal creation contract and are meant for seed/bootstrap
tooling only: ``bulk_load_books`` accepts pre-computed rating aggregates and
``delete_all_books`` wipes every listing.
"""
from typing import Iterable, List, Union

from bookswap.db.connection import transaction
from bookswap.errors import NotFoundError, ValidationError
from bookswap.models.book_model import Book, BookSeed
from bookswap.services.book_service import insert_args
from bookswap.utils.validation import validate_input

BULK_INSERT_SQL = """
    INSERT INTO books (
        title, author, genre, condition, type, location, contact,
        owner_id, description, publish_year, image,
        average_rating, total_ratings
    )
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13)
    RETURNING *
"""


async def bulk_load_books(seeds: Iterable[Union[BookSeed, dict]]) -> List[Book]:
    """Insert seed listings with their aggregates, all or nothing.

    Every ``owner_id`` must reference an existing user, otherwise
    ``NotFoundError`` is raised and nothing is inserted.
    """
    books_in = [validate_input(BookSeed, seed) for seed in seeds]
    if not books_in:
        return []
    owner_ids = sorted({b.owner_id for b in books_in}, key=str)
    async with transaction() as conn:
        found = await conn.fetch("SELECT id FROM users WHERE id = ANY($1::uuid[])", owner_ids)
        missing = {str(o) for o in owner_ids} - {str(r["id"]) for r in found}
        if missing:
            raise NotFoundError(f"Unknown owner(s): {', '.join(sorted(missing))}")
        records = []
        for book_in in books_in:
            records.append(
                await conn.fetchrow(
                    BULK_INSERT_SQL,
                    *insert_args(book_in),
                    book_in.average_rating,
                    book_in.total_ratings,
                )
            )
    return [Book.from_db_record(r) for r in records]


async def delete_all_books(*, confirm: bool = False) -> int:
    """Irreversibly delete every listing. Returns the number removed."""
    if confirm is not True:
        raise ValidationError("delete_all_books requires confirm=True")
    async with transaction() as conn:
        status = await conn.execute("DELETE FROM books")
    return int(status.split()[-1])
