"""User service helpers."""
from typing import Optional, Union
from uuid import UUID

from bookswap.db.connection import connection
from bookswap.errors import DuplicateError
from bookswap.models.user_model import User, UserCreate
from bookswap.utils.security import hash_password
from bookswap.utils.validation import as_uuid, validate_input


async def create_user(data: Union[UserCreate, dict]) -> User:
    """Insert a user; the credential is stored as a bcrypt hash.

    Raises ``DuplicateError`` when the username is taken.
    """
    user_in = validate_input(UserCreate, data)
    password_hash = hash_password(user_in.password)
    async with connection() as conn:
        record = await conn.fetchrow(
            """
            INSERT INTO users (username, email, location, password_hash)
            VALUES ($1, $2, $3, $4)
            RETURNING *
            """,
            user_in.username,
            user_in.email,
            user_in.location,
            password_hash,
        )
    return User.from_db_record(record)


async def get_user_by_id(user_id: Union[str, UUID]) -> Optional[User]:
    uid = as_uuid(user_id, "user_id")
    async with connection() as conn:
        record = await conn.fetchrow("SELECT * FROM users WHERE id=$1", uid)
    return User.from_db_record(record) if record else None


async def get_user_by_username(username: str) -> Optional[User]:
    async with connection() as conn:
        record = await conn.fetchrow("SELECT * FROM users WHERE username=$1", username)
    return User.from_db_record(record) if record else None


async def get_or_create_user(data: Union[UserCreate, dict]) -> User:
    """Return the user with ``data.username``, creating it when missing."""
    user_in = validate_input(UserCreate, data)
    existing = await get_user_by_username(user_in.username)
    if existing:
        return existing
    try:
        return await create_user(user_in)
    except DuplicateError:
        # Created concurrently by another caller
        user = await get_user_by_username(user_in.username)
        if user is None:
            raise
        return user
