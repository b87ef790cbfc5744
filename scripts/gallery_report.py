"""Print what the gallery page would show, straight from the catalog."""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import bookswap modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookswap.db.connection import close_pool, init_db
from bookswap.errors import CatalogError
from bookswap.services.catalog_service import GallerySummary, gallery_summary
from bookswap.utils.logger import configure_logging, get_logger

logger = get_logger("gallery_report")


def render(summary: GallerySummary) -> str:
    lines = [f"Total books in database: {summary.total_books}", ""]

    lines.append(f"Recent listings (first {len(summary.recent)}):")
    lines.append("-" * 80)
    for index, book in enumerate(summary.recent, start=1):
        lines.append(f'{index}. "{book.title}" by {book.author or "Unknown"}')
        lines.append(
            f"   Genre: {book.genre_label()} | Type: {book.type.value} | Condition: {book.condition or 'N/A'}"
        )
        lines.append(f"   Image: {book.image_label()}")
        lines.append(f"   Owner: {book.owner_label()}")
        lines.append(f"   Rating: {book.rating_label()}/5 ({book.total_ratings} ratings)")
        lines.append("")

    lines.append(f"Books with uploaded images ({len(summary.uploaded)} total):")
    lines.append("-" * 80)
    for index, book in enumerate(summary.uploaded, start=1):
        lines.append(f'{index}. "{book.title}" by {book.author or "Unknown"}')
        lines.append(f"   Image: {book.image}")
        lines.append(f"   Genre: {book.genre_label()} | Type: {book.type.value}")
        lines.append("")

    lines.append("Books by genre:")
    lines.append("-" * 30)
    for genre, count in summary.genre_counts.items():
        lines.append(f"   {genre:<15} : {count} books")
    return "\n".join(lines)


async def main(limit: int, uploads_limit: int) -> int:
    try:
        await init_db()
        summary = await gallery_summary(limit=limit, uploads_limit=uploads_limit)
    except CatalogError as exc:
        logger.error("Gallery check failed: %s", exc)
        return 1
    finally:
        await close_pool()

    if summary.total_books == 0:
        logger.warning("No books found; run scripts/seed_books.py first")
        return 1
    print(render(summary))
    return 0


if __name__ == "__main__":
    configure_logging()
    parser = argparse.ArgumentParser(description="Show gallery data from the catalog")
    parser.add_argument("--limit", type=int, default=10, help="Recent listings to show")
    parser.add_argument("--uploads-limit", type=int, default=5, help="Uploaded-image listings to show")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.limit, args.uploads_limit)))
