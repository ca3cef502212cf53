from typing import List, Optional
from datetime import datetime
from schemas.shared import CamelModel, SuccessResponse


class FromUser(CamelModel):
    id: str
    nickname: str
    avatar: Optional[str] = None


class RelatedPaper(CamelModel):
    id: str
    content: str
    type: str


class RelatedComment(CamelModel):
    id: str
    content: str


class MessageResponse(CamelModel):
    id: str
    type: str  # 'comment', 'reply' or 'like'
    content: str
    is_read: bool
    created_at: datetime
    from_user: FromUser
    related_paper: RelatedPaper
    related_comment: Optional[RelatedComment] = None


class MessageListEnvelope(SuccessResponse):
    messages: List[MessageResponse]


class UnreadCountResponse(SuccessResponse):
    count: int
