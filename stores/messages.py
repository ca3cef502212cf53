import logging
from typing import Optional

import settings
from database import get_db, new_id, utc_now
from errors import Forbidden, InvalidArgument, NotFound

logger = logging.getLogger(__name__)

MESSAGE_TYPES = ("comment", "reply", "like")


def create_message(user_id: str, message_type: str, paper_id: str, from_user_id: str,
                   content: str, comment_id: Optional[str] = None) -> str:
    if message_type not in MESSAGE_TYPES:
        raise InvalidArgument(f"Message type must be one of: {', '.join(MESSAGE_TYPES)}")
    if user_id == from_user_id:
        raise InvalidArgument("Users are never notified about their own actions")
    message_id = new_id()
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO messages (id, user_id, type, paper_id, comment_id, from_user_id, content, is_read, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?)",
            (message_id, user_id, message_type, paper_id, comment_id, from_user_id, content, utc_now())
        )
        conn.commit()
    return message_id


def list_for_user(user_id: str, limit: int = None):
    """Newest-first feed with actor and related paper/comment previews."""
    if limit is None:
        limit = settings.MESSAGE_FEED_LIMIT
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            SELECT m.id, m.type, m.content, m.is_read, m.created_at,
                   m.from_user_id, fu.nickname, fu.avatar,
                   p.id, p.content, p.type,
                   m.comment_id, c.content
            FROM messages m
            JOIN users fu ON m.from_user_id = fu.id
            JOIN papers p ON m.paper_id = p.id
            LEFT JOIN comments c ON m.comment_id = c.id
            WHERE m.user_id = ?
            ORDER BY m.created_at DESC, m.rowid DESC
            LIMIT ?
        """, (user_id, limit))
        rows = cursor.fetchall()

    messages = []
    for row in rows:
        message = {
            "id": row[0],
            "type": row[1],
            "content": row[2] or "",
            "is_read": bool(row[3]),
            "created_at": row[4],
            "from_user": {"id": row[5], "nickname": row[6], "avatar": row[7] or settings.DEFAULT_AVATAR_URL},
            "related_paper": {"id": row[8], "content": row[9], "type": row[10]},
            "related_comment": None,
        }
        if row[11] and row[12] is not None:
            message["related_comment"] = {"id": row[11], "content": row[12]}
        messages.append(message)
    return messages


def mark_read(message_id: str, requesting_user_id: str) -> bool:
    """Mark a message read. Returns True if it was unread before this call."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT user_id, is_read FROM messages WHERE id = ?", (message_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFound("Message not found")
        recipient_id, is_read = row
        if recipient_id != requesting_user_id:
            raise Forbidden("You can only mark your own messages as read.")
        if is_read:
            return False
        cursor.execute("UPDATE messages SET is_read = 1 WHERE id = ? AND is_read = 0", (message_id,))
        flipped = cursor.rowcount > 0
        conn.commit()
        return flipped


def count_unread(user_id: str) -> int:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM messages WHERE user_id = ? AND is_read = 0", (user_id,))
        return cursor.fetchone()[0]
