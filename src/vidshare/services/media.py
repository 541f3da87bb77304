"""Image uploads to the Cloudinary hosting service."""

from __future__ import annotations

import io
import logging
from typing import Callable, Mapping, Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from vidshare.config.settings import Settings, UploadPolicy, get_settings

logger = logging.getLogger(__name__)

Uploader = Callable[..., Mapping[str, object]]


class MediaError(RuntimeError):
    """Base exception raised by the media service."""


class UnsupportedMediaError(MediaError):
    """Raised when a file violates the configured upload policy."""


class MediaNotConfiguredError(MediaError):
    """Raised when no hosting credentials are available."""


class MediaUploadError(MediaError):
    """Raised when the hosting service rejects or fails an upload."""


class ImageHostingService:
    """Validate image uploads and forward them to Cloudinary."""

    def __init__(self, settings: Optional[Settings] = None, *, uploader: Optional[Uploader] = None) -> None:
        self._settings = settings or get_settings()
        self._policy = self._settings.uploads.avatar
        self._uploader = uploader or self._configure_cloudinary()

    @property
    def policy(self) -> UploadPolicy:
        return self._policy

    def validate(self, content: bytes, content_type: Optional[str]) -> None:
        """Raise :class:`UnsupportedMediaError` unless the file is an acceptable image."""

        if not content_type or not content_type.startswith(self._policy.allowed_mime_prefix):
            raise UnsupportedMediaError("Only image files allowed")
        if not content:
            raise UnsupportedMediaError("No image provided")
        if len(content) > self._policy.max_bytes:
            raise UnsupportedMediaError(f"Image exceeds the {self._policy.max_bytes} byte limit")

    def upload_avatar(self, content: bytes, *, filename: Optional[str], content_type: Optional[str]) -> str:
        """Upload an avatar image and return its HTTPS URL."""

        self.validate(content, content_type)
        if self._uploader is None:
            raise MediaNotConfiguredError("Image hosting is not configured")

        try:
            result = self._uploader(
                io.BytesIO(content),
                folder=self._policy.folder,
                resource_type="image",
                filename=filename,
            )
        except cloudinary.exceptions.Error as exc:
            logger.warning("Avatar upload failed: %s", exc)
            raise MediaUploadError("Avatar update failed") from exc

        secure_url = result.get("secure_url")
        if not secure_url:
            raise MediaUploadError("Avatar update failed")
        return str(secure_url)

    def _configure_cloudinary(self) -> Optional[Uploader]:
        if not self._settings.cloudinary_configured:
            logger.warning("Cloudinary credentials not configured - avatar uploads disabled.")
            return None

        cloudinary.config(
            cloud_name=self._settings.cloudinary_cloud_name,
            api_key=self._settings.cloudinary_api_key.get_secret_value(),
            api_secret=self._settings.cloudinary_api_secret.get_secret_value(),
            secure=True,
        )
        return cloudinary.uploader.upload


__all__ = [
    "ImageHostingService",
    "MediaError",
    "MediaNotConfiguredError",
    "MediaUploadError",
    "UnsupportedMediaError",
]
