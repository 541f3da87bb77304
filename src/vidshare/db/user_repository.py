"""Repository for interacting with the `users` table."""

from __future__ import annotations

from typing import Iterable, Optional

from vidshare.db import unique_ids
from vidshare.db.repositories import BaseRepository
from vidshare.models.user import User


class UserRepository(BaseRepository[User]):
    """Data access object encapsulating user persistence logic."""

    table_name = "users"
    model_type = User
    insert_fields = (
        "username",
        "email",
        "password_hash",
        "avatar",
        "channels",
    )
    update_fields = (
        "username",
        "avatar",
        "channels",
    )
    auto_timestamp_field = "updated_at"

    def find_by_email(self, email: str) -> Optional[User]:
        """Return an existing user by e-mail address, ignoring case."""

        return self.find_first("lower(email) = lower(%(email)s)", {"email": email})

    def list_by_ids(self, ids: Iterable[str]) -> list[User]:
        """Return every user whose identifier appears in ``ids``."""

        wanted = unique_ids(ids)
        if not wanted:
            return []
        return self.fetch_all("id::text = ANY(%(ids)s)", {"ids": list(wanted)})


__all__ = ["UserRepository"]
