from typing import Optional

import settings
from database import get_db, new_id, utc_now
from errors import InvalidArgument, NotFound

COMMENT_SELECT = """
    SELECT c.id, c.paper_id, c.content, c.author_id, u.nickname, u.avatar, c.parent_id, c.created_at
    FROM comments c
    LEFT JOIN users u ON c.author_id = u.id
"""


def _row_to_comment(row):
    return {
        "id": row[0],
        "paper_id": row[1],
        "content": row[2],
        "author_id": row[3],
        "author_nickname": row[4],
        "author_avatar": row[5] or settings.DEFAULT_AVATAR_URL,
        "parent_id": row[6],
        "created_at": row[7],
    }


def get_comment(comment_id: str):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(COMMENT_SELECT + " WHERE c.id = ?", (comment_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFound("Comment not found")
        return _row_to_comment(row)


def create_comment(paper_id: str, author_id: str, content: str, parent_id: Optional[str] = None):
    """Persist a comment. parent_id must already be the effective (top-level) parent."""
    if not content or not content.strip():
        raise InvalidArgument("Comment content cannot be empty")
    comment_id = new_id()
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO comments (id, paper_id, content, author_id, parent_id, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (comment_id, paper_id, content, author_id, parent_id, utc_now())
        )
        conn.commit()
    return get_comment(comment_id)


def list_by_paper(paper_id: str):
    """All comments of a paper, oldest first. Clients group replies on parent_id."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            COMMENT_SELECT + " WHERE c.paper_id = ? ORDER BY c.created_at ASC, c.rowid ASC",
            (paper_id,)
        )
        return [_row_to_comment(row) for row in cursor.fetchall()]
