"""User models."""
from datetime import datetime
from typing import Mapping
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    email: EmailStr
    location: str = ""
    password: str = Field(..., min_length=1)


class User(BaseModel):
    """User record as returned to callers; the credential hash is never exposed."""

    id: UUID
    username: str
    email: str
    location: str = ""
    created_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_db_record(cls, record: Mapping):
        """Create User from database record."""
        return cls(
            id=record["id"],
            username=record["username"],
            email=record["email"],
            location=record.get("location") or "",
            created_at=record["created_at"],
        )


class OwnerSummary(BaseModel):
    """Partial owner projection attached to gallery listings."""

    username: str
    location: str = ""
