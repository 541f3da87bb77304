"""Pydantic models for vidshare domain objects and API payloads."""

from vidshare.models.base import StoredDocument, VidshareBaseModel
from vidshare.models.user import User
from vidshare.models.video import Comment, Video

__all__ = ["Comment", "StoredDocument", "User", "Video", "VidshareBaseModel"]
