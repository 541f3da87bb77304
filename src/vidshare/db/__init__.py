"""Database utilities, connection helpers and store contracts for vidshare."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, Iterable, Optional, Protocol, Sequence

from psycopg2.extensions import connection as PsycopgConnection

from vidshare.models.user import User
from vidshare.models.video import Comment, Video
from vidshare.utils.reactions import ReactionState

ReactionMutator = Callable[[ReactionState], ReactionState]


class ConnectionFactory(Protocol):
    """Callable protocol that yields a managed psycopg2 connection."""

    def __call__(self) -> AbstractContextManager[PsycopgConnection]:
        """Return a context manager that produces a live database connection."""


class UserStore(Protocol):
    """Narrow contract the service layer relies on for user records.

    Lookups raise :class:`vidshare.db.repositories.RecordNotFoundError` when
    the record does not exist.
    """

    def insert(self, model: User) -> User: ...

    def update(self, model: User, *, include_none: bool = False) -> User: ...

    def get_by_id(self, record_id: object) -> User: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def list_by_ids(self, ids: Iterable[str]) -> list[User]: ...


class VideoStore(Protocol):
    """Narrow contract the service layer relies on for video documents.

    Every mutating call is atomic with respect to other writers of the same
    video. Lookups and mutations raise
    :class:`vidshare.db.repositories.RecordNotFoundError` for unknown ids.
    """

    def insert(self, model: Video) -> Video: ...

    def update(self, model: Video, *, include_none: bool = False) -> Video: ...

    def get_by_id(self, record_id: object) -> Video: ...

    def delete_by_id(self, record_id: object) -> None: ...

    def list_recent(self, *, category: Optional[str] = None, query: Optional[str] = None) -> list[Video]: ...

    def list_suggested(self, category: str, exclude_id: object, *, limit: int = 8) -> list[Video]: ...

    def increment_views(self, record_id: object) -> Video: ...

    def update_reactions(self, record_id: object, mutate: ReactionMutator) -> Video: ...

    def append_comment(self, record_id: object, comment: Comment) -> Video: ...

    def update_comment_text(self, record_id: object, comment_id: object, text: str) -> Video: ...

    def remove_comment(self, record_id: object, comment_id: object) -> Video: ...


def unique_ids(values: Iterable[object]) -> Sequence[str]:
    """Return the distinct, non-empty identifiers from ``values`` as strings."""

    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(str(value), None)
    return list(seen)


__all__ = ["ConnectionFactory", "ReactionMutator", "UserStore", "VideoStore", "unique_ids"]
