"""Notification policy for likes, comments and replies.

Each triggering action emits at most one message, never to the acting user.
Message writes are best-effort: a failure is logged and swallowed so the
like or comment that triggered it still succeeds.
"""

import logging
from typing import Optional

from stores import messages

logger = logging.getLogger(__name__)

LIKE_MESSAGE_CONTENT = "liked your paper"


def _emit(recipient_id: str, message_type: str, paper_id: str, actor_id: str,
          content: str, comment_id: Optional[str] = None) -> Optional[str]:
    # Don't notify users about their own actions
    if recipient_id == actor_id:
        logger.debug(f"Skipping self-notification for user {actor_id}")
        return None
    try:
        return messages.create_message(
            user_id=recipient_id,
            message_type=message_type,
            paper_id=paper_id,
            from_user_id=actor_id,
            content=content,
            comment_id=comment_id,
        )
    except Exception:
        logger.warning(
            f"Failed to write {message_type} notification for user {recipient_id} on paper {paper_id}",
            exc_info=True,
        )
        return None


def notify_like(paper: dict, actor_id: str) -> Optional[str]:
    """Called only for a newly inserted like; unlikes never emit or retract."""
    return _emit(paper["author_id"], "like", paper["id"], actor_id, LIKE_MESSAGE_CONTENT)


def notify_comment(paper: dict, comment: dict, addressee: Optional[dict], actor_id: str) -> Optional[str]:
    """Notify for a new comment.

    addressee is the top-level comment a reply resolved to, or None for a
    top-level comment, in which case the paper author is notified.
    """
    if addressee is None:
        return _emit(paper["author_id"], "comment", paper["id"], actor_id, comment["content"], comment["id"])
    return _emit(addressee["author_id"], "reply", paper["id"], actor_id, comment["content"], comment["id"])
