"""Endpoints for the signed-in user's profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from vidshare.api.dependencies import get_container, get_current_user
from vidshare.models.api import AvatarResponse, UserResponse, UserUpdateRequest
from vidshare.services.auth import AuthenticatedUser
from vidshare.services.container import ServiceContainer

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> UserResponse:
    return UserResponse.from_user(services.users.get_profile(current_user.user_id))


@router.put("/update", response_model=UserResponse)
def update_me(
    payload: UserUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> UserResponse:
    return UserResponse.from_user(services.users.update_profile(current_user.user_id, payload))


@router.put("/avatar", response_model=AvatarResponse)
def update_avatar(
    avatar: UploadFile = File(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_container),
) -> AvatarResponse:
    """Upload an avatar image to the hosting service and store its URL."""

    user = services.users.update_avatar(
        current_user.user_id,
        avatar.file.read(),
        filename=avatar.filename,
        content_type=avatar.content_type,
    )
    return AvatarResponse(message="Avatar updated", user=UserResponse.from_user(user))
