"""Reset the catalog to the sample listings used for demos and development."""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import bookswap modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookswap.db.connection import close_pool, init_db
from bookswap.errors import CatalogError
from bookswap.services import admin_service, book_service, user_service
from bookswap.utils.logger import configure_logging, get_logger

logger = get_logger("seed_books")

SAMPLE_USER = {
    "username": "sampleuser",
    "email": "sample@bookswap.com",
    "location": "New York",
    "password": "sample123",
}

# (title, author, genre, condition, type, location, description, average, total, year)
SAMPLE_BOOKS = [
    ("The Great Gatsby", "F. Scott Fitzgerald", "Fiction", "Good", "Donate", "New York, NY",
     "A classic American novel about the Jazz Age and the American Dream.", 4.2, 15, 1925),
    ("To Kill a Mockingbird", "Harper Lee", "Fiction", "New", "Swap", "Brooklyn, NY",
     "A gripping tale of racial injustice and childhood innocence.", 4.5, 23, 1960),
    ("1984", "George Orwell", "Fiction", "Used", "Donate", "Manhattan, NY",
     "A dystopian social science fiction novel and cautionary tale.", 4.7, 31, 1949),
    ("Pride and Prejudice", "Jane Austen", "Romance", "Good", "Swap", "Queens, NY",
     "A romantic novel of manners written by Jane Austen.", 4.3, 18, 1813),
    ("The Catcher in the Rye", "J.D. Salinger", "Fiction", "Fair", "Donate", "Bronx, NY",
     "A controversial novel originally published for adults.", 3.8, 12, 1951),
    ("A Brief History of Time", "Stephen Hawking", "Science", "New", "Swap", "Staten Island, NY",
     "A popular science book on cosmology by Stephen Hawking.", 4.1, 9, 1988),
    ("The Alchemist", "Paulo Coelho", "Self-help", "Good", "Donate", "Long Island, NY",
     "A philosophical book about following your dreams.", 4.0, 27, 1988),
    ("Sapiens", "Yuval Noah Harari", "History", "New", "Swap", "Buffalo, NY",
     "A brief history of humankind exploring human evolution.", 4.4, 21, 2011),
    ("The Da Vinci Code", "Dan Brown", "Mystery", "Used", "Donate", "Albany, NY",
     "A mystery thriller novel exploring art, history, and religion.", 3.9, 16, 2003),
    ("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", "Fantasy", "Good", "Swap", "Rochester, NY",
     "The first book in the Harry Potter series.", 4.6, 42, 1997),
    ("Atomic Habits", "James Clear", "Self-help", "New", "Donate", "Syracuse, NY",
     "A practical guide to building good habits and breaking bad ones.", 4.5, 19, 2018),
    ("The Art of War", "Sun Tzu", "Philosophy", "Good", "Swap", "Ithaca, NY",
     "An ancient Chinese military treatise and philosophy.", 4.2, 14, -500),  # 5th century BC
]


def build_seeds(owner_id, contact: str) -> list:
    return [
        {
            "title": title,
            "author": author,
            "genre": genre,
            "condition": condition,
            "type": exchange_type,
            "location": location,
            "contact": contact,
            "owner_id": owner_id,
            "description": description,
            "average_rating": average,
            "total_ratings": total,
            "publish_year": year,
        }
        for (title, author, genre, condition, exchange_type, location, description, average, total, year)
        in SAMPLE_BOOKS
    ]


async def main() -> int:
    try:
        await init_db()
        user = await user_service.get_or_create_user(SAMPLE_USER)
        logger.info("Using sample user %s (%s)", user.username, user.id)

        removed = await admin_service.delete_all_books(confirm=True)
        logger.info("Cleared %d existing books", removed)

        books = await admin_service.bulk_load_books(build_seeds(user.id, user.email))
        for book in books:
            logger.info("Added book: %s by %s", book.title, book.author)

        total = await book_service.count_books()
        logger.info("Loaded %d sample books, %d books in database", len(books), total)
        return 0
    except CatalogError as exc:
        logger.error("Seeding failed: %s", exc)
        return 1
    finally:
        await close_pool()


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))
