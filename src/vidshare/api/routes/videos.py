"""Video endpoints: creation, listing, counters and reactions."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from vidshare.api.dependencies import get_container, get_current_user
from vidshare.models.api import (
    MessageResponse,
    VideoCreatedResponse,
    VideoCreateRequest,
    VideoResponse,
    VideoUpdateRequest,
)
from vidshare.models.video import Video
from vidshare.services.auth import AuthenticatedUser
from vidshare.services.container import ServiceContainer

router = APIRouter(prefix="/api/videos", tags=["videos"])


def _single(services: ServiceContainer, video: Video) -> VideoResponse:
    avatars = services.videos.uploader_avatars([video])
    return VideoResponse.from_video(video, uploader_avatar=avatars.get(video.channel_id, ""))


def _many(services: ServiceContainer, videos: List[Video]) -> List[VideoResponse]:
    return VideoResponse.many(videos, services.videos.uploader_avatars(videos))


@router.post("/upload", response_model=VideoCreatedResponse, status_code=status.HTTP_201_CREATED)
def upload_video(
    payload: VideoCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> VideoCreatedResponse:
    """Store video metadata; the link is normalised into a playable URL."""

    video = services.videos.create_video(payload, current_user)
    return VideoCreatedResponse(message="Video uploaded successfully", video=_single(services, video))


@router.get("", response_model=List[VideoResponse])
def list_videos(
    category: Optional[str] = None,
    q: Optional[str] = None,
    services: ServiceContainer = Depends(get_container),
) -> List[VideoResponse]:
    return _many(services, services.videos.list_videos(category=category, query=q))


@router.get("/suggested/{category}/{exclude_id}", response_model=List[VideoResponse])
def suggested_videos(
    category: str,
    exclude_id: str,
    services: ServiceContainer = Depends(get_container),
) -> List[VideoResponse]:
    return _many(services, services.videos.suggested_videos(category, exclude_id))


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(video_id: str, services: ServiceContainer = Depends(get_container)) -> VideoResponse:
    return _single(services, services.videos.get_video(video_id))


@router.put("/{video_id}", response_model=VideoResponse)
def update_video(
    video_id: str,
    payload: VideoUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> VideoResponse:
    return _single(services, services.videos.update_video(video_id, payload, current_user))


@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> MessageResponse:
    services.videos.delete_video(video_id, current_user)
    return MessageResponse(message="Video deleted")


@router.put("/{video_id}/view", response_model=VideoResponse)
def add_view(video_id: str, services: ServiceContainer = Depends(get_container)) -> VideoResponse:
    return _single(services, services.videos.add_view(video_id))


@router.put("/{video_id}/like", response_model=VideoResponse)
def toggle_like(
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> VideoResponse:
    return _single(services, services.videos.toggle_like(video_id, current_user.user_id))


@router.put("/{video_id}/dislike", response_model=VideoResponse)
def toggle_dislike(
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> VideoResponse:
    return _single(services, services.videos.toggle_dislike(video_id, current_user.user_id))
