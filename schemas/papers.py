from pydantic import validator
from typing import List, Optional
from datetime import datetime
from schemas.shared import CamelModel, SuccessResponse
from stores.papers import PAPER_TYPES


class PaperCreate(CamelModel):
    content: Optional[str] = ""
    type: str = "text"
    media_url: Optional[str] = None
    latitude: float
    longitude: float

    @validator('type')
    def validate_type(cls, v):
        if v not in PAPER_TYPES:
            raise ValueError(f'Type must be one of: {list(PAPER_TYPES)}')
        return v


class PaperResponse(CamelModel):
    id: str
    content: str
    type: str
    media_url: Optional[str] = None
    author_id: str
    author_nickname: Optional[str] = None
    author_avatar: Optional[str] = None
    latitude: float
    longitude: float
    likes: int
    comment_count: int
    created_at: datetime
    distance: Optional[float] = None  # meters, nearby search only
    is_liked: Optional[bool] = None  # for the requesting user, nearby and detail only


class CommentCreate(CamelModel):
    content: str
    parent_id: Optional[str] = None

    @validator('content')
    def validate_content(cls, v):
        if not v or not v.strip():
            raise ValueError('Content cannot be empty')
        return v


class CommentResponse(CamelModel):
    id: str
    content: str
    author_id: str
    author_nickname: Optional[str] = None
    author_avatar: Optional[str] = None
    parent_id: Optional[str] = None
    created_at: datetime


class PaperDetailResponse(PaperResponse):
    comments: List[CommentResponse] = []


class PaperEnvelope(SuccessResponse):
    paper: PaperResponse


class PaperDetailEnvelope(SuccessResponse):
    paper: PaperDetailResponse


class PaperListEnvelope(SuccessResponse):
    papers: List[PaperResponse]


class CommentEnvelope(SuccessResponse):
    comment: CommentResponse


class CommentListEnvelope(SuccessResponse):
    comments: List[CommentResponse]


class LikeResponse(SuccessResponse):
    liked: bool


class UploadResponse(SuccessResponse):
    url: str
    type: str  # paper type matching the file extension
