"""Two-level comment threading.

Comments are either top-level (no parent) or replies whose parent is a
top-level comment. A reply addressed to another reply is re-parented to that
reply's top-level ancestor, so no stored chain is ever deeper than two.
"""

from typing import Optional

from errors import NotFound
from stores import comments


def normalize_parent(requested_parent_id: Optional[str], paper_id: str):
    """Resolve the parent a new comment is actually stored under.

    Returns (effective_parent_id, addressee). addressee is the top-level
    comment row whose author receives the reply notification, or None for a
    new top-level comment.
    """
    if not requested_parent_id:
        return None, None

    try:
        parent = comments.get_comment(requested_parent_id)
    except NotFound:
        raise NotFound("Parent comment not found")
    if parent["paper_id"] != paper_id:
        raise NotFound("Parent comment not found")

    if parent["parent_id"]:
        ancestor = comments.get_comment(parent["parent_id"])
        return ancestor["id"], ancestor

    return parent["id"], parent
