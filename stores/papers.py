import logging
import sqlite3
from typing import Optional

import settings
from database import get_db, new_id, utc_now
from errors import InvalidArgument, NotFound
from utils.geo import distance, is_valid_location

logger = logging.getLogger(__name__)

PAPER_TYPES = ("text", "image", "audio", "video")

# Like and comment counts are always aggregated from child tables, never stored.
PAPER_SELECT = """
    SELECT p.id, p.content, p.type, p.media_url, p.author_id,
           u.nickname, u.avatar, p.latitude, p.longitude,
           COUNT(DISTINCT l.id) AS likes,
           COUNT(DISTINCT c.id) AS comment_count,
           p.created_at
    FROM papers p
    LEFT JOIN users u ON p.author_id = u.id
    LEFT JOIN likes l ON p.id = l.paper_id
    LEFT JOIN comments c ON p.id = c.paper_id
"""


def _row_to_paper(row):
    return {
        "id": row[0],
        "content": row[1],
        "type": row[2],
        "media_url": row[3],
        "author_id": row[4],
        "author_nickname": row[5],
        "author_avatar": row[6] or settings.DEFAULT_AVATAR_URL,
        "latitude": row[7],
        "longitude": row[8],
        "likes": row[9] or 0,
        "comment_count": row[10] or 0,
        "created_at": row[11],
    }


def create_paper(author_id: str, content: Optional[str], paper_type: Optional[str],
                 media_url: Optional[str], latitude, longitude):
    content = content or ""
    media_url = media_url or None
    paper_type = paper_type or "text"
    if not content.strip() and not media_url:
        raise InvalidArgument("Content cannot be empty")
    if paper_type not in PAPER_TYPES:
        raise InvalidArgument(f"Type must be one of: {', '.join(PAPER_TYPES)}")
    if not is_valid_location(latitude, longitude):
        raise InvalidArgument("A valid location is required")

    paper_id = new_id()
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO papers (id, content, type, media_url, author_id, latitude, longitude, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (paper_id, content, paper_type, media_url, author_id, float(latitude), float(longitude), utc_now())
        )
        conn.commit()
    logger.info(f"User {author_id} threw paper {paper_id}")
    return get_paper(paper_id)


def get_paper(paper_id: str):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(PAPER_SELECT + " WHERE p.id = ? GROUP BY p.id", (paper_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFound("Paper not found")
        return _row_to_paper(row)


def get_paper_author_id(paper_id: str) -> str:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT author_id FROM papers WHERE id = ?", (paper_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFound("Paper not found")
        return row[0]


def list_nearby(latitude: float, longitude: float, radius_meters: float, sort: Optional[str] = "distance"):
    """Scan every paper and keep those within radius_meters of the center.

    Each result carries its distance in meters. sort is "distance", "newest",
    or None for storage order.
    """
    if not is_valid_location(latitude, longitude):
        raise InvalidArgument("A valid location is required")
    if radius_meters is None or radius_meters < 0:
        raise InvalidArgument("Radius must be a non-negative number of meters")

    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(PAPER_SELECT + " GROUP BY p.id ORDER BY p.created_at DESC")
        rows = cursor.fetchall()

    nearby = []
    for row in rows:
        paper = _row_to_paper(row)
        paper["distance"] = distance(latitude, longitude, paper["latitude"], paper["longitude"])
        if paper["distance"] <= radius_meters:
            nearby.append(paper)

    if sort == "distance":
        nearby.sort(key=lambda p: p["distance"])
    elif sort == "newest":
        nearby.sort(key=lambda p: p["created_at"], reverse=True)
    return nearby


def list_by_author(author_id: str):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            PAPER_SELECT + " WHERE p.author_id = ? GROUP BY p.id ORDER BY p.created_at DESC",
            (author_id,)
        )
        return [_row_to_paper(row) for row in cursor.fetchall()]


def list_commented_by_user(user_id: str):
    """Distinct papers with at least one comment by user_id, newest first."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            PAPER_SELECT + """
            WHERE p.id IN (SELECT paper_id FROM comments WHERE author_id = ?)
            GROUP BY p.id ORDER BY p.created_at DESC
            """,
            (user_id,)
        )
        return [_row_to_paper(row) for row in cursor.fetchall()]


def has_liked(paper_id: str, user_id: str) -> bool:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM likes WHERE paper_id = ? AND user_id = ?", (paper_id, user_id))
        return cursor.fetchone() is not None


def toggle_like(paper_id: str, user_id: str):
    """Flip the (paper, user) like. Returns (liked, inserted).

    inserted is True only when this call created the like row.
    """
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id FROM papers WHERE id = ?", (paper_id,))
        if not cursor.fetchone():
            raise NotFound("Paper not found")

        cursor.execute("SELECT id FROM likes WHERE paper_id = ? AND user_id = ?", (paper_id, user_id))
        if cursor.fetchone():
            cursor.execute("DELETE FROM likes WHERE paper_id = ? AND user_id = ?", (paper_id, user_id))
            conn.commit()
            return False, False

        try:
            cursor.execute(
                "INSERT INTO likes (id, paper_id, user_id, created_at) VALUES (?, ?, ?, ?)",
                (new_id(), paper_id, user_id, utc_now())
            )
        except sqlite3.IntegrityError:
            # A concurrent request inserted the same like first
            logger.debug(f"Like on paper {paper_id} by {user_id} already applied")
            return True, False
        conn.commit()
        return True, True
