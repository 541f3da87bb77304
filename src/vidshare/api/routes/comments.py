"""Endpoints for comments nested inside a video."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from vidshare.api.dependencies import get_container, get_current_user
from vidshare.models.api import CommentRequest, CommentResponse, MessageResponse
from vidshare.services.auth import AuthenticatedUser
from vidshare.services.container import ServiceContainer

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.post("/{video_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    video_id: str,
    payload: CommentRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> CommentResponse:
    comment = services.comments.add_comment(video_id, payload.text, current_user)
    return CommentResponse.from_comment(comment)


@router.put("/{video_id}/comment/{comment_id}", response_model=CommentResponse)
def edit_comment(
    video_id: str,
    comment_id: str,
    payload: CommentRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> CommentResponse:
    comment = services.comments.edit_comment(video_id, comment_id, payload.text, current_user)
    return CommentResponse.from_comment(comment)


@router.delete("/{video_id}/comment/{comment_id}", response_model=MessageResponse)
def delete_comment(
    video_id: str,
    comment_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> MessageResponse:
    services.comments.delete_comment(video_id, comment_id, current_user)
    return MessageResponse(message="Comment deleted")
