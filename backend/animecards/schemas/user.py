"""Pydantic schemas for user operations."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from animecards.db.base import as_utc


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^\S+$")


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, max_length=128)


class UserRead(UserBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    _utc_created_at = field_validator("created_at")(as_utc)
