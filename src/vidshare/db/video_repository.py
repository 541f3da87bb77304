"""Repository for interacting with the `videos` table.

Each row is a document: reactions live in ``TEXT[]`` columns and comments
in a ``JSONB`` array. Mutations are expressed as single statements or as a
row-locked transaction so concurrent writers never overwrite each other.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from psycopg2.extras import Json, RealDictCursor

from vidshare.db import ReactionMutator
from vidshare.db.repositories import BaseRepository, as_db_id
from vidshare.models.base import utc_now
from vidshare.models.video import Comment, Video
from vidshare.utils.reactions import ReactionState

_UPDATE_COMMENT_TEXT = """
UPDATE videos SET comments = COALESCE((
    SELECT jsonb_agg(
        CASE WHEN entry->>'comment_id' = %(comment_id)s
             THEN entry || jsonb_build_object('text', %(text)s::text, 'edited_at', %(edited_at)s::text)
             ELSE entry
        END
        ORDER BY position)
    FROM jsonb_array_elements(comments) WITH ORDINALITY AS entries(entry, position)
), '[]'::jsonb)
WHERE id = %(id)s
RETURNING *
"""

_REMOVE_COMMENT = """
UPDATE videos SET comments = COALESCE((
    SELECT jsonb_agg(entry ORDER BY position)
    FROM jsonb_array_elements(comments) WITH ORDINALITY AS entries(entry, position)
    WHERE entry->>'comment_id' <> %(comment_id)s
), '[]'::jsonb)
WHERE id = %(id)s
RETURNING *
"""


class VideoRepository(BaseRepository[Video]):
    """Data access object encapsulating video document persistence logic."""

    table_name = "videos"
    model_type = Video
    insert_fields = (
        "title",
        "description",
        "category",
        "channel_id",
        "uploader",
        "video_url",
        "thumbnail_url",
        "views",
        "likes",
        "dislikes",
        "comments",
    )
    update_fields = (
        "title",
        "description",
        "category",
    )
    json_fields = ("comments",)
    auto_timestamp_field = "updated_at"

    def list_recent(self, *, category: Optional[str] = None, query: Optional[str] = None) -> list[Video]:
        """Return videos newest first, optionally filtered by category or text."""

        clauses: List[str] = []
        params: Dict[str, object] = {}
        if category:
            clauses.append("category = %(category)s")
            params["category"] = category
        if query:
            clauses.append("(title ILIKE %(pattern)s OR description ILIKE %(pattern)s)")
            params["pattern"] = f"%{query}%"
        where_clause = " AND ".join(clauses) or None
        return self.fetch_all(where_clause, params, order_by="upload_date DESC")

    def list_suggested(self, category: str, exclude_id: object, *, limit: int = 8) -> list[Video]:
        """Return recent videos sharing a category, excluding one video."""

        return self.fetch_all(
            "category = %(category)s AND id::text <> %(exclude_id)s",
            {"category": category, "exclude_id": str(exclude_id)},
            order_by="upload_date DESC",
            limit=limit,
        )

    def increment_views(self, record_id: object) -> Video:
        """Atomically add one view and return the updated document."""

        return self._returning(
            "UPDATE videos SET views = views + 1 WHERE id = %(id)s RETURNING *",
            {"id": as_db_id(record_id)},
        )

    def update_reactions(self, record_id: object, mutate: ReactionMutator) -> Video:
        """Apply ``mutate`` to the reaction collections under a row lock."""

        params = {"id": as_db_id(record_id)}
        with self._connection() as connection:
            with connection.cursor(cursor_factory=RealDictCursor) as cursor:
                current = self._fetch_row_with(
                    cursor,
                    "SELECT likes, dislikes FROM videos WHERE id = %(id)s FOR UPDATE",
                    params,
                )
                state = mutate(ReactionState.of(current["likes"] or (), current["dislikes"] or ()))
                row = self._fetch_row_with(
                    cursor,
                    "UPDATE videos SET likes = %(likes)s, dislikes = %(dislikes)s WHERE id = %(id)s RETURNING *",
                    {**params, "likes": list(state.likes), "dislikes": list(state.dislikes)},
                )
        return self.model_type.model_validate(row)

    def append_comment(self, record_id: object, comment: Comment) -> Video:
        """Append a comment to the embedded comment array."""

        return self._returning(
            "UPDATE videos SET comments = comments || %(comment)s::jsonb WHERE id = %(id)s RETURNING *",
            {
                "id": as_db_id(record_id),
                "comment": Json([comment.model_dump(mode="json")]),
            },
        )

    def update_comment_text(self, record_id: object, comment_id: object, text: str) -> Video:
        """Replace the text of one embedded comment and stamp ``edited_at``."""

        return self._returning(
            _UPDATE_COMMENT_TEXT,
            {
                "id": as_db_id(record_id),
                "comment_id": str(comment_id),
                "text": text,
                "edited_at": utc_now().isoformat(),
            },
        )

    def remove_comment(self, record_id: object, comment_id: object) -> Video:
        """Drop one embedded comment; unknown comment ids leave the array unchanged."""

        return self._returning(
            _REMOVE_COMMENT,
            {"id": as_db_id(record_id), "comment_id": str(comment_id)},
        )


__all__ = ["VideoRepository"]
