"""Application settings loaded from environment variables and config files."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt, SecretStr
from pydantic.networks import PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict

from vidshare.config import CONFIG_ROOT
from vidshare.utils import Environment


class UploadPolicy(BaseModel):
    """Constraints for a single category of uploaded media."""

    folder: str = "youtube_clone/avatars"
    allowed_mime_prefix: str = "image/"
    max_bytes: PositiveInt = 5 * 1024 * 1024

    model_config = ConfigDict(extra="forbid")


class UploadConfig(BaseModel):
    """Top-level configuration for all media uploads."""

    avatar: UploadPolicy = Field(default_factory=UploadPolicy)

    model_config = ConfigDict(extra="forbid")


def _load_upload_config(upload_path: Path) -> UploadConfig:
    if not upload_path.exists():
        return UploadConfig()

    raw_data = yaml.safe_load(upload_path.read_text(encoding="utf-8")) or {}
    return UploadConfig.model_validate(raw_data)


class Settings(BaseSettings):
    """Primary application settings for the vidshare API and CLI."""

    database_url: PostgresDsn = Field(alias="DATABASE_URL")
    jwt_secret: SecretStr = Field(alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_days: PositiveInt = Field(default=7, alias="JWT_EXPIRES_DAYS")

    cloudinary_cloud_name: Optional[str] = Field(default=None, alias="CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: Optional[SecretStr] = Field(default=None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: Optional[SecretStr] = Field(default=None, alias="CLOUDINARY_API_SECRET")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: PositiveInt = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: Environment = Field(default=Environment.DEVELOPMENT, alias="APP_ENV")
    default_avatar_url: str = Field(default="https://i.pravatar.cc/150", alias="DEFAULT_AVATAR_URL")

    db_min_connections: PositiveInt = Field(default=1, alias="DB_MIN_CONNECTIONS")
    db_max_connections: PositiveInt = Field(default=5, alias="DB_MAX_CONNECTIONS")
    db_acquire_timeout: PositiveFloat = Field(default=30.0, alias="DB_ACQUIRE_TIMEOUT")
    auto_migrate: bool = Field(default=True, alias="AUTO_MIGRATE")

    uploads: UploadConfig = Field(default_factory=lambda: _load_upload_config(CONFIG_ROOT / "uploads.yaml"))

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cloudinary_configured(self) -> bool:
        """Return ``True`` when every Cloudinary credential is present."""

        return all(
            value is not None
            for value in (self.cloudinary_cloud_name, self.cloudinary_api_key, self.cloudinary_api_secret)
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()


__all__ = ["Settings", "UploadConfig", "UploadPolicy", "get_settings"]
