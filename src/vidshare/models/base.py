"""Shared base model definitions for vidshare domain objects."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


class VidshareBaseModel(BaseModel):
    """Base model configured for vidshare-wide defaults."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StoredDocument(VidshareBaseModel):
    """A row owned by a repository: ``id`` and ``updated_at`` are set by Postgres."""

    id: Optional[UUID] = None
    updated_at: Optional[datetime] = None


__all__ = ["StoredDocument", "VidshareBaseModel", "utc_now"]
