"""Video creation, retrieval, counters and reactions."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional
from uuid import UUID

from vidshare.db import UserStore, VideoStore, unique_ids
from vidshare.db.repositories import RecordNotFoundError
from vidshare.models.api import VideoCreateRequest, VideoUpdateRequest
from vidshare.models.video import Video
from vidshare.services.auth import AuthenticatedUser
from vidshare.utils.links import classify_video_link, normalize_video_link
from vidshare.utils.reactions import ReactionAction, toggle_reaction

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 8


class VideoError(RuntimeError):
    """Base exception raised by the video service."""


class VideoNotFoundError(VideoError):
    """Raised when a video id is unknown or not a valid identifier."""


class VideoPermissionError(VideoError):
    """Raised when a user changes a video they did not upload."""


def parse_video_id(raw_id: object) -> UUID:
    """Return ``raw_id`` as a UUID, treating malformed ids as missing videos."""

    if isinstance(raw_id, UUID):
        return raw_id
    try:
        return UUID(str(raw_id))
    except ValueError as exc:
        raise VideoNotFoundError("Video not found") from exc


class VideoService:
    """Coordinates video documents between the API and the video store."""

    def __init__(self, videos: VideoStore, users: UserStore) -> None:
        self._videos = videos
        self._users = users

    # ------------------------------------------------------------------ #
    # Creation and retrieval                                             #
    # ------------------------------------------------------------------ #
    def create_video(self, request: VideoCreateRequest, uploader: AuthenticatedUser) -> Video:
        """Normalise the submitted link and store a new video document.

        The playable and thumbnail URLs are fixed here and never recomputed.
        """

        kind, _ = classify_video_link(request.video_url)
        link = normalize_video_link(request.video_url)
        model = Video(
            title=request.title,
            description=request.description,
            category=request.category,
            channel_id=uploader.user_id,
            uploader=uploader.username,
            video_url=link.playable_url,
            thumbnail_url=link.thumbnail_url,
        )
        video = self._videos.insert(model)
        logger.info("Stored video %s for user %s (link=%s)", video.id, uploader.user_id, kind.value)
        return video

    def list_videos(self, *, category: Optional[str] = None, query: Optional[str] = None) -> list[Video]:
        """Return all videos, newest first."""

        return self._videos.list_recent(category=category or None, query=query or None)

    def get_video(self, video_id: object) -> Video:
        """Return a single video or raise :class:`VideoNotFoundError`."""

        identifier = parse_video_id(video_id)
        try:
            return self._videos.get_by_id(identifier)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc

    def suggested_videos(self, category: str, exclude_id: object, *, limit: int = SUGGESTION_LIMIT) -> list[Video]:
        """Return recent videos from the same category, excluding the current one."""

        return self._videos.list_suggested(category, str(exclude_id), limit=limit)

    def uploader_avatars(self, videos: Iterable[Video]) -> Dict[str, str]:
        """Map uploader ids to their current avatar URLs."""

        channel_ids = unique_ids(video.channel_id for video in videos)
        if not channel_ids:
            return {}
        return {str(user.id): user.avatar for user in self._users.list_by_ids(channel_ids)}

    # ------------------------------------------------------------------ #
    # Mutations                                                          #
    # ------------------------------------------------------------------ #
    def add_view(self, video_id: object) -> Video:
        """Increment the view counter of a video."""

        identifier = parse_video_id(video_id)
        try:
            return self._videos.increment_views(identifier)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc

    def toggle_like(self, video_id: object, user_id: str) -> Video:
        """Like a video, or remove an existing like."""

        return self.react(video_id, user_id, ReactionAction.LIKE)

    def toggle_dislike(self, video_id: object, user_id: str) -> Video:
        """Dislike a video, or remove an existing dislike."""

        return self.react(video_id, user_id, ReactionAction.DISLIKE)

    def react(self, video_id: object, user_id: str, action: ReactionAction) -> Video:
        """Apply a reaction toggle atomically within the video store."""

        identifier = parse_video_id(video_id)
        try:
            video = self._videos.update_reactions(
                identifier,
                lambda state: toggle_reaction(state, user_id, action),
            )
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc

        logger.info(
            "User %s toggled %s on video %s (likes=%d, dislikes=%d)",
            user_id,
            action.value,
            identifier,
            len(video.likes),
            len(video.dislikes),
        )
        return video

    def update_video(self, video_id: object, request: VideoUpdateRequest, user: AuthenticatedUser) -> Video:
        """Edit title, description or category of a video owned by ``user``."""

        video = self._owned_video(video_id, user)
        changes = request.model_dump(exclude_unset=True)
        updated = video.model_copy(update=changes)
        try:
            return self._videos.update(updated, include_none=True)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc

    def delete_video(self, video_id: object, user: AuthenticatedUser) -> None:
        """Remove a video owned by ``user``."""

        video = self._owned_video(video_id, user)
        try:
            self._videos.delete_by_id(video.id)
        except RecordNotFoundError as exc:
            raise VideoNotFoundError("Video not found") from exc
        logger.info("Deleted video %s for user %s", video.id, user.user_id)

    def _owned_video(self, video_id: object, user: AuthenticatedUser) -> Video:
        video = self.get_video(video_id)
        if video.channel_id != user.user_id:
            raise VideoPermissionError("Only the uploader can modify this video")
        return video


__all__ = [
    "SUGGESTION_LIMIT",
    "VideoError",
    "VideoNotFoundError",
    "VideoPermissionError",
    "VideoService",
    "parse_video_id",
]
