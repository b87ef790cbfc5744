"""
Pytest configuration and fixtures for the catalog tests.

Unit tests swap the asyncpg pool for a scripted fake: each query pops the
next queued result and is recorded for inspection.
"""

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple

import pytest

from bookswap.db import connection as db_connection


class FakeTransaction:
    def __init__(self, conn: "FakeConnection", options: dict):
        self.conn = conn
        self.options = options
        self.outcome: Optional[str] = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.outcome = "rollback" if exc_type else "commit"
        return False


class FakeConnection:
    """Stand-in for ``asyncpg.Connection`` returning queued results in order."""

    def __init__(self):
        self.calls: List[Tuple[str, str, tuple]] = []
        self.results: List[Any] = []
        self.transactions: List[FakeTransaction] = []

    def queue(self, *results: Any) -> None:
        self.results.extend(results)

    async def _next(self, method: str, query: str, args: tuple, default: Any) -> Any:
        self.calls.append((method, re.sub(r"\s+", " ", query).strip(), args))
        if not self.results:
            return default
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetchrow(self, query: str, *args: Any):
        return await self._next("fetchrow", query, args, None)

    async def fetch(self, query: str, *args: Any):
        return await self._next("fetch", query, args, [])

    async def fetchval(self, query: str, *args: Any):
        return await self._next("fetchval", query, args, None)

    async def execute(self, query: str, *args: Any):
        return await self._next("execute", query, args, "OK")

    def transaction(self, **options: Any) -> FakeTransaction:
        tx = FakeTransaction(self, options)
        self.transactions.append(tx)
        return tx

    @property
    def queries(self) -> List[str]:
        return [query for _, query, _ in self.calls]


class _Acquire:
    def __init__(self, pool: "FakePool"):
        self.pool = pool

    async def __aenter__(self):
        if self.pool.acquire_error is not None:
            raise self.pool.acquire_error
        return self.pool.conn

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakePool:
    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.acquire_error: Optional[BaseException] = None
        self.acquire_timeouts: List[Optional[float]] = []

    def acquire(self, timeout: Optional[float] = None) -> _Acquire:
        self.acquire_timeouts.append(timeout)
        return _Acquire(self)


@pytest.fixture()
def fake_pool(monkeypatch) -> FakePool:
    pool = FakePool(FakeConnection())

    async def _get_pool():
        return pool

    monkeypatch.setattr(db_connection, "get_pool", _get_pool)
    return pool


@pytest.fixture()
def fake_conn(fake_pool: FakePool) -> FakeConnection:
    return fake_pool.conn


_BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_user_record(**overrides: Any) -> dict:
    record = {
        "id": uuid.uuid4(),
        "username": "sampleuser",
        "email": "sample@bookswap.com",
        "location": "New York",
        "password_hash": "$2b$12$notarealhash",
        "created_at": _BASE_TIME,
    }
    record.update(overrides)
    return record


def make_book_record(seq: int = 1, **overrides: Any) -> dict:
    record = {
        "id": uuid.uuid4(),
        "seq": seq,
        "title": "1984",
        "author": "George Orwell",
        "genre": "Fiction",
        "condition": "Used",
        "type": "Donate",
        "location": "Manhattan, NY",
        "contact": "sample@bookswap.com",
        "owner_id": uuid.uuid4(),
        "description": None,
        "average_rating": 0.0,
        "total_ratings": 0,
        "publish_year": 1949,
        "image": None,
        "created_at": _BASE_TIME + timedelta(seconds=seq),
    }
    record.update(overrides)
    return record


def make_listing_record(seq: int = 1, owner_username: Optional[str] = "sampleuser", **overrides: Any) -> dict:
    record = make_book_record(seq=seq, **overrides)
    record["owner_username"] = owner_username
    record["owner_location"] = "New York" if owner_username else None
    return record
