"""Pydantic models describing registered users."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vidshare.models.base import StoredDocument


class User(StoredDocument):
    """Domain model representing a row in the ``users`` table.

    ``password_hash`` holds the bcrypt digest and must never leave the
    service layer; API responses are built from :class:`vidshare.models.api.UserResponse`.
    """

    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=254)
    password_hash: str
    avatar: str = ""
    channels: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


__all__ = ["User"]
