"""Asyncpg connection utilities."""
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import asyncpg

from bookswap.config import settings
from bookswap.errors import (
    CatalogError,
    DuplicateError,
    StoreError,
    UnavailableError,
    ValidationError,
)
from bookswap.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_pool: Optional[asyncpg.pool.Pool] = None
_pool_lock: Optional[asyncio.Lock] = None
_pool_lock_loop: Optional[asyncio.AbstractEventLoop] = None

# Failures that mean "the store cannot answer right now".
_UNAVAILABLE_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.TooManyConnectionsError,
    asyncpg.exceptions.QueryCanceledError,
)

_DRIVER_ERRORS = (asyncpg.exceptions.PostgresError, asyncpg.exceptions.InterfaceError, *_UNAVAILABLE_ERRORS)


def translate_error(exc: BaseException) -> CatalogError:
    """Map a driver exception onto the catalog error taxonomy."""
    if isinstance(exc, CatalogError):
        return exc
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        return UnavailableError(f"Store unavailable: {exc!r}")
    if isinstance(exc, asyncpg.exceptions.UniqueViolationError):
        return DuplicateError(getattr(exc, "detail", None) or str(exc))
    if isinstance(exc, (asyncpg.exceptions.CheckViolationError, asyncpg.exceptions.DataError)):
        return ValidationError(str(exc))
    return StoreError(f"Unexpected store error: {exc!r}")


async def ensure_schema_exists(pool: asyncpg.pool.Pool) -> None:
    """Create tables and indexes if they don't exist."""
    async with pool.acquire() as conn:
        table_count = await conn.fetchval(
            """
            SELECT COUNT(*)
            FROM information_schema.tables
            WHERE table_schema = current_schema()
            AND table_name IN ('users', 'books')
            """
        )
        if table_count < 2:
            await conn.execute(SCHEMA_PATH.read_text())
            logger.info("Database schema created")
        else:
            # Older schemas stored publish_year as INTEGER
            year_type = await conn.fetchval(
                """
                SELECT data_type
                FROM information_schema.columns
                WHERE table_schema = current_schema()
                AND table_name = 'books'
                AND column_name = 'publish_year'
                """
            )
            if year_type == "integer":
                await conn.execute("ALTER TABLE books ALTER COLUMN publish_year TYPE BIGINT")
                logger.info("Widened books.publish_year to BIGINT")
            logger.info("Database schema already exists")


def _get_pool_lock() -> asyncio.Lock:
    # A lock is tied to the loop it first waits on, so keep one per loop
    global _pool_lock, _pool_lock_loop
    loop = asyncio.get_running_loop()
    if _pool_lock is None or _pool_lock_loop is not loop:
        _pool_lock = asyncio.Lock()
        _pool_lock_loop = loop
    return _pool_lock


async def init_db(dsn: Optional[str] = None) -> asyncpg.pool.Pool:
    """Initialize the connection pool and ensure the schema exists.

    Concurrent first callers share a single pool.
    """
    global _pool
    if _pool is not None:
        return _pool
    async with _get_pool_lock():
        if _pool is not None:
            return _pool
        try:
            pool = await asyncpg.create_pool(
                dsn or settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                timeout=settings.db_timeout,
                command_timeout=settings.db_timeout,
            )
        except _DRIVER_ERRORS as exc:
            raise translate_error(exc) from exc
        try:
            await ensure_schema_exists(pool)
        except _DRIVER_ERRORS as exc:
            await pool.close()
            raise translate_error(exc) from exc
        _pool = pool
        logger.info("Connection pool ready (min=%d, max=%d)", settings.db_pool_min_size, settings.db_pool_max_size)
    return _pool


async def get_pool() -> asyncpg.pool.Pool:
    if _pool is None:
        return await init_db()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Connection pool closed")


@asynccontextmanager
async def connection() -> AsyncIterator[asyncpg.Connection]:
    """Acquire a pooled connection, translating store failures.

    Catalog errors raised inside the block propagate unchanged.
    """
    try:
        pool = await get_pool()
        async with pool.acquire(timeout=settings.db_timeout) as conn:
            yield conn
    except CatalogError:
        raise
    except _DRIVER_ERRORS as exc:
        raise translate_error(exc) from exc


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """Like :func:`connection`, inside a single transaction."""
    async with connection() as conn:
        async with conn.transaction():
            yield conn
