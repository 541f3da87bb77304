"""Wiring of stores and services shared by the API and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from vidshare.config.settings import Settings
from vidshare.db import UserStore, VideoStore
from vidshare.db.connection import DatabasePool
from vidshare.db.user_repository import UserRepository
from vidshare.db.video_repository import VideoRepository
from vidshare.services import SupportsClose
from vidshare.services.auth import AuthService
from vidshare.services.comments import CommentService
from vidshare.services.media import ImageHostingService
from vidshare.services.users import UserService
from vidshare.services.videos import VideoService


@dataclass(slots=True)
class ServiceContainer:
    """Holds one instance of every service for the lifetime of the app."""

    settings: Settings
    auth: AuthService
    videos: VideoService
    comments: CommentService
    users: UserService
    health_check: Callable[[], bool] = lambda: True
    resources: List[SupportsClose] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        video_store: VideoStore,
        user_store: UserStore,
        media: Optional[ImageHostingService] = None,
        health_check: Optional[Callable[[], bool]] = None,
        resources: Optional[List[SupportsClose]] = None,
    ) -> "ServiceContainer":
        """Assemble services around already constructed stores."""

        media = media or ImageHostingService(settings)
        return cls(
            settings=settings,
            auth=AuthService(user_store, settings=settings),
            videos=VideoService(video_store, user_store),
            comments=CommentService(video_store, user_store),
            users=UserService(user_store, media),
            health_check=health_check or (lambda: True),
            resources=list(resources or []),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """Create a pooled Postgres connection and the repositories on top of it."""

        pool = DatabasePool.from_settings(settings)
        return cls.build(
            settings,
            video_store=VideoRepository(pool.connection),
            user_store=UserRepository(pool.connection),
            health_check=pool.ping,
            resources=[pool],
        )

    def close(self) -> None:
        """Release pooled connections and other held resources."""

        while self.resources:
            self.resources.pop().close()


__all__ = ["ServiceContainer"]
