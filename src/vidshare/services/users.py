"""Profile reads and updates for the signed-in user."""

from __future__ import annotations

import logging
from typing import Optional

from vidshare.db import UserStore
from vidshare.db.repositories import RecordNotFoundError
from vidshare.models.api import UserUpdateRequest
from vidshare.models.user import User
from vidshare.services.auth import UserNotFoundError
from vidshare.services.media import ImageHostingService

logger = logging.getLogger(__name__)


class UserService:
    """Read and modify the profile belonging to an authenticated user."""

    def __init__(self, users: UserStore, media: ImageHostingService) -> None:
        self._users = users
        self._media = media

    def get_profile(self, user_id: str) -> User:
        try:
            return self._users.get_by_id(user_id)
        except RecordNotFoundError as exc:
            raise UserNotFoundError("User not found") from exc

    def update_profile(self, user_id: str, request: UserUpdateRequest) -> User:
        changes = {key: value for key, value in request.model_dump(exclude_unset=True).items() if value is not None}
        return self._save(self.get_profile(user_id), changes)

    def update_avatar(
        self,
        user_id: str,
        content: bytes,
        *,
        filename: Optional[str],
        content_type: Optional[str],
    ) -> User:
        """Upload a new avatar image and store its URL on the profile."""

        user = self.get_profile(user_id)
        avatar_url = self._media.upload_avatar(content, filename=filename, content_type=content_type)
        logger.info("Updated avatar for user %s", user_id)
        return self._save(user, {"avatar": avatar_url})

    def _save(self, user: User, changes: dict[str, object]) -> User:
        if not changes:
            return user
        try:
            return self._users.update(user.model_copy(update=changes))
        except RecordNotFoundError as exc:
            raise UserNotFoundError("User not found") from exc


__all__ = ["UserService"]
