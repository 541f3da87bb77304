"""Request and response bodies exchanged over the HTTP API.

Request models reject unknown fields and use the camelCase keys of the
public API. Response models are built from domain models and serialised by
alias, so route handlers never expose storage-only fields such as password
hashes.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from vidshare.models.user import User
from vidshare.models.video import Comment, Video


class ApiModel(BaseModel):
    """Base for every API payload: camelCase aliases, unknown fields rejected."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class RegisterRequest(ApiModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    avatar: Optional[str] = None


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserUpdateRequest(ApiModel):
    """Profile fields a user may change; at least one must be supplied."""

    username: Optional[str] = Field(default=None, min_length=1, max_length=50)
    avatar: Optional[str] = None
    channels: Optional[List[str]] = None

    @model_validator(mode="after")
    def _ensure_any_field(self) -> "UserUpdateRequest":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self


class VideoCreateRequest(ApiModel):
    video_url: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)


class VideoUpdateRequest(ApiModel):
    """Editable video metadata. The link itself is fixed at creation."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("title cannot be null")
        return value

    @model_validator(mode="after")
    def _ensure_any_field(self) -> "VideoUpdateRequest":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self


class CommentRequest(ApiModel):
    text: str = Field(min_length=1, max_length=5000)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class MessageResponse(ApiModel):
    message: str


class UserResponse(ApiModel):
    user_id: UUID
    username: str
    email: str
    avatar: str
    channels: List[str]
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            user_id=user.id,
            username=user.username,
            email=user.email,
            avatar=user.avatar,
            channels=list(user.channels),
            created_at=user.created_at,
        )


class AuthResponse(ApiModel):
    message: str
    token: str
    user: UserResponse


class AvatarResponse(ApiModel):
    message: str
    user: UserResponse


class CommentResponse(ApiModel):
    comment_id: UUID
    user_id: str
    username: str
    avatar: str
    text: str
    timestamp: datetime
    edited_at: Optional[datetime] = None

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls.model_validate(comment.model_dump())


class VideoResponse(ApiModel):
    video_id: UUID
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    channel_id: str
    uploader: str
    uploader_avatar: str = ""
    video_url: str
    thumbnail_url: str
    views: int
    likes: List[str]
    dislikes: List[str]
    like_count: int
    dislike_count: int
    comments: List[CommentResponse]
    upload_date: Optional[datetime] = None

    @classmethod
    def from_video(cls, video: Video, *, uploader_avatar: str = "") -> "VideoResponse":
        return cls(
            video_id=video.id,
            title=video.title,
            description=video.description,
            category=video.category,
            channel_id=video.channel_id,
            uploader=video.uploader,
            uploader_avatar=uploader_avatar,
            video_url=video.video_url,
            thumbnail_url=video.thumbnail_url,
            views=video.views,
            likes=list(video.likes),
            dislikes=list(video.dislikes),
            like_count=len(video.likes),
            dislike_count=len(video.dislikes),
            comments=[CommentResponse.from_comment(comment) for comment in video.comments],
            upload_date=video.upload_date,
        )

    @classmethod
    def many(cls, videos: List[Video], avatars: Mapping[str, str]) -> List["VideoResponse"]:
        return [cls.from_video(video, uploader_avatar=avatars.get(video.channel_id, "")) for video in videos]


class VideoCreatedResponse(ApiModel):
    message: str
    video: VideoResponse


__all__ = [
    "ApiModel",
    "AuthResponse",
    "AvatarResponse",
    "CommentRequest",
    "CommentResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "UserResponse",
    "UserUpdateRequest",
    "VideoCreateRequest",
    "VideoCreatedResponse",
    "VideoResponse",
    "VideoUpdateRequest",
]
