"""Pydantic models describing stored videos and their nested comments."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import Field

from vidshare.models.base import StoredDocument, VidshareBaseModel, utc_now
from vidshare.utils.reactions import ReactionState


class Comment(VidshareBaseModel):
    """A comment embedded in the ``comments`` document of a video."""

    comment_id: UUID = Field(default_factory=uuid4)
    user_id: str
    username: str
    avatar: str = ""
    text: str = Field(min_length=1)
    timestamp: datetime = Field(default_factory=utc_now)
    edited_at: Optional[datetime] = None


class Video(StoredDocument):
    """Domain model representing a row in the ``videos`` table.

    ``video_url`` and ``thumbnail_url`` are derived once from the submitted
    link by :func:`vidshare.utils.links.normalize_video_link` and are not
    recomputed when the metadata is edited.
    """

    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)
    channel_id: str
    uploader: str
    video_url: str
    thumbnail_url: str = ""
    views: int = Field(default=0, ge=0)
    likes: List[str] = Field(default_factory=list)
    dislikes: List[str] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    upload_date: Optional[datetime] = None

    @property
    def reactions(self) -> ReactionState:
        """Return the like/dislike collections as a :class:`ReactionState`."""

        return ReactionState.of(self.likes, self.dislikes)

    def find_comment(self, comment_id: object) -> Optional[Comment]:
        """Return the embedded comment with the given identifier, if present."""

        wanted = str(comment_id)
        for comment in self.comments:
            if str(comment.comment_id) == wanted:
                return comment
        return None


__all__ = ["Comment", "Video"]
