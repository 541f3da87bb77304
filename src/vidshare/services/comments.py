"""Comments embedded in video documents."""

from __future__ import annotations

import logging
from uuid import UUID

from vidshare.db import UserStore, VideoStore
from vidshare.db.repositories import RecordNotFoundError
from vidshare.models.video import Comment, Video
from vidshare.services.auth import AuthenticatedUser
from vidshare.services.videos import VideoNotFoundError, parse_video_id

logger = logging.getLogger(__name__)


class CommentError(RuntimeError):
    """Base exception raised by the comment service."""


class CommentNotFoundError(CommentError):
    """Raised when a comment id does not exist on the video."""


class CommentPermissionError(CommentError):
    """Raised when a user edits or deletes someone else's comment."""


def _parse_comment_id(raw_id: object) -> UUID:
    try:
        return UUID(str(raw_id))
    except ValueError as exc:
        raise CommentNotFoundError("Comment not found") from exc


class CommentService:
    """Add, edit and delete comments; authorship comes from the caller's token."""

    def __init__(self, videos: VideoStore, users: UserStore) -> None:
        self._videos = videos
        self._users = users

    def add_comment(self, video_id: object, text: str, author: AuthenticatedUser) -> Comment:
        identifier = parse_video_id(video_id)
        comment = Comment(
            user_id=author.user_id,
            username=author.username,
            avatar=self._avatar_for(author.user_id),
            text=text,
        )
        try:
            self._videos.append_comment(identifier, comment)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc
        logger.info("User %s commented on video %s", author.user_id, identifier)
        return comment

    def edit_comment(self, video_id: object, comment_id: object, text: str, author: AuthenticatedUser) -> Comment:
        identifier = parse_video_id(video_id)
        comment_uuid = _parse_comment_id(comment_id)
        self._authored_comment(identifier, comment_uuid, author)

        try:
            video = self._videos.update_comment_text(identifier, comment_uuid, text)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc

        updated = video.find_comment(comment_uuid)
        if updated is None:
            # Removed between the ownership check and the update.
            raise CommentNotFoundError("Comment not found")
        return updated

    def delete_comment(self, video_id: object, comment_id: object, author: AuthenticatedUser) -> None:
        identifier = parse_video_id(video_id)
        comment_uuid = _parse_comment_id(comment_id)
        self._authored_comment(identifier, comment_uuid, author)

        try:
            self._videos.remove_comment(identifier, comment_uuid)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc
        logger.info("User %s deleted comment %s on video %s", author.user_id, comment_uuid, identifier)

    def _authored_comment(self, video_id: UUID, comment_id: UUID, author: AuthenticatedUser) -> Comment:
        video = self._load_video(video_id)
        comment = video.find_comment(comment_id)
        if comment is None:
            raise CommentNotFoundError("Comment not found")
        if comment.user_id != author.user_id:
            raise CommentPermissionError("Only the author can modify this comment")
        return comment

    def _load_video(self, video_id: UUID) -> Video:
        try:
            return self._videos.get_by_id(video_id)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc

    def _avatar_for(self, user_id: str) -> str:
        try:
            return self._users.get_by_id(user_id).avatar
        except RecordNotFoundError:
            return ""


__all__ = ["CommentError", "CommentNotFoundError", "CommentPermissionError", "CommentService"]
