"""Normalisation helpers for user-supplied video links."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

YOUTUBE_EMBED_TEMPLATE = "https://www.youtube.com/embed/{video_id}"
YOUTUBE_THUMBNAIL_TEMPLATE = "https://i.ytimg.com/vi/{video_id}/maxresdefault.jpg"

DIRECT_MEDIA_EXTENSIONS = ("mp4", "webm", "ogg", "mov", "mkv")


class LinkKind(str, Enum):
    """How a submitted link was recognised."""

    EMPTY = "empty"
    YOUTUBE_WATCH = "youtube_watch"
    YOUTUBE_SHORT = "youtube_short"
    YOUTUBE_EMBED = "youtube_embed"
    DIRECT_MEDIA = "direct_media"
    OPAQUE = "opaque"

    @property
    def is_youtube(self) -> bool:
        return self in (LinkKind.YOUTUBE_WATCH, LinkKind.YOUTUBE_SHORT, LinkKind.YOUTUBE_EMBED)


# Tried in order; the first match wins.
_YOUTUBE_PATTERNS: Tuple[Tuple[LinkKind, "re.Pattern[str]"], ...] = (
    (LinkKind.YOUTUBE_WATCH, re.compile(r"[?&]v=([^&]+)")),
    (LinkKind.YOUTUBE_SHORT, re.compile(r"youtu\.be/([^?&/]+)")),
    (LinkKind.YOUTUBE_EMBED, re.compile(r"youtube\.com/embed/([^?&/]+)")),
)
_DIRECT_MEDIA_PATTERN = re.compile(
    r"\.(?:" + "|".join(DIRECT_MEDIA_EXTENSIONS) + r")$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class NormalizedLink:
    """Playable URL plus an optional thumbnail derived from a raw link.

    ``thumbnail_url`` is only populated when a YouTube identifier was found.
    """

    playable_url: str
    thumbnail_url: str = ""


def youtube_embed_url(video_id: str) -> str:
    """Return the iframe-compatible URL for a YouTube identifier."""

    return YOUTUBE_EMBED_TEMPLATE.format(video_id=video_id)


def youtube_thumbnail_url(video_id: str) -> str:
    """Return the high resolution thumbnail URL for a YouTube identifier."""

    return YOUTUBE_THUMBNAIL_TEMPLATE.format(video_id=video_id)


def classify_video_link(raw_url: Optional[str]) -> Tuple[LinkKind, Optional[str]]:
    """Return the kind of ``raw_url`` and its YouTube id, if it has one.

    Surrounding whitespace is ignored. Malformed or partial YouTube links
    fall through to :attr:`LinkKind.DIRECT_MEDIA` or :attr:`LinkKind.OPAQUE`.
    """

    trimmed = (raw_url or "").strip()
    if not trimmed:
        return LinkKind.EMPTY, None

    for kind, pattern in _YOUTUBE_PATTERNS:
        match = pattern.search(trimmed)
        if match:
            return kind, match.group(1)

    if _DIRECT_MEDIA_PATTERN.search(trimmed):
        return LinkKind.DIRECT_MEDIA, None
    return LinkKind.OPAQUE, None


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """Return the YouTube identifier from a watch, short or embed link."""

    return classify_video_link(url)[1]


def is_direct_media(url: Optional[str]) -> bool:
    """Return ``True`` when the link points straight at a media file."""

    return classify_video_link(url)[0] is LinkKind.DIRECT_MEDIA


def normalize_video_link(raw_url: Optional[str]) -> NormalizedLink:
    """Derive the playable and thumbnail URLs for a raw link.

    Watch and short links are rewritten to the embed form. Embed links are
    kept as submitted. Every YouTube link gains a thumbnail; direct media
    files and anything unrecognised are returned trimmed without one. Never
    raises.
    """

    kind, video_id = classify_video_link(raw_url)
    trimmed = (raw_url or "").strip()

    if video_id is None:
        return NormalizedLink(playable_url=trimmed)
    if kind is LinkKind.YOUTUBE_EMBED:
        return NormalizedLink(playable_url=trimmed, thumbnail_url=youtube_thumbnail_url(video_id))
    return NormalizedLink(
        playable_url=youtube_embed_url(video_id),
        thumbnail_url=youtube_thumbnail_url(video_id),
    )


__all__ = [
    "DIRECT_MEDIA_EXTENSIONS",
    "LinkKind",
    "NormalizedLink",
    "classify_video_link",
    "extract_youtube_id",
    "is_direct_media",
    "normalize_video_link",
    "youtube_embed_url",
    "youtube_thumbnail_url",
]
