from fastapi import APIRouter, Depends, Query
from typing import Optional
import settings
from schemas.papers import (
    PaperCreate, PaperEnvelope, PaperDetailEnvelope, PaperListEnvelope,
    CommentCreate, CommentEnvelope, CommentListEnvelope, LikeResponse
)
from stores import papers, comments
from utils.comment_threads import normalize_parent
from utils.notifications import notify_comment, notify_like
from utils.route_helpers import get_current_user_id

router = APIRouter(prefix="/api/papers", tags=["papers"])


@router.post("", response_model=PaperEnvelope)
def throw_paper(paper: PaperCreate, current_user_id: str = Depends(get_current_user_id)):
    created = papers.create_paper(
        author_id=current_user_id,
        content=paper.content,
        paper_type=paper.type,
        media_url=paper.media_url,
        latitude=paper.latitude,
        longitude=paper.longitude,
    )
    return {"success": True, "paper": created}


@router.get("/nearby", response_model=PaperListEnvelope)
def search_nearby(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: Optional[float] = Query(None, ge=0, description="Search radius in meters"),
    sort: str = Query("distance", pattern="^(distance|newest)$"),
    current_user_id: str = Depends(get_current_user_id)
):
    if radius is None:
        radius = settings.DEFAULT_SEARCH_RADIUS_METERS
    nearby = papers.list_nearby(latitude, longitude, radius, sort=sort)
    for paper in nearby:
        paper["is_liked"] = papers.has_liked(paper["id"], current_user_id)
    return {"success": True, "papers": nearby}


@router.get("/{paper_id}", response_model=PaperDetailEnvelope)
def get_paper_detail(paper_id: str, current_user_id: str = Depends(get_current_user_id)):
    paper = papers.get_paper(paper_id)
    paper["comments"] = comments.list_by_paper(paper_id)
    paper["is_liked"] = papers.has_liked(paper_id, current_user_id)
    return {"success": True, "paper": paper}


@router.post("/{paper_id}/like", response_model=LikeResponse)
def like_paper(paper_id: str, current_user_id: str = Depends(get_current_user_id)):
    """Toggle the current user's like. Only a newly created like notifies the author."""
    paper = {"id": paper_id, "author_id": papers.get_paper_author_id(paper_id)}
    liked, inserted = papers.toggle_like(paper_id, current_user_id)
    if inserted:
        notify_like(paper, current_user_id)
    return {"success": True, "liked": liked}


@router.get("/{paper_id}/comments", response_model=CommentListEnvelope)
def list_comments(paper_id: str, current_user_id: str = Depends(get_current_user_id)):
    papers.get_paper_author_id(paper_id)  # 404 for unknown papers
    return {"success": True, "comments": comments.list_by_paper(paper_id)}


@router.post("/{paper_id}/comments", response_model=CommentEnvelope)
def add_comment(paper_id: str, comment: CommentCreate, current_user_id: str = Depends(get_current_user_id)):
    paper = {"id": paper_id, "author_id": papers.get_paper_author_id(paper_id)}
    parent_id, addressee = normalize_parent(comment.parent_id, paper_id)
    created = comments.create_comment(paper_id, current_user_id, comment.content, parent_id)
    notify_comment(paper, created, addressee, current_user_id)
    return {"success": True, "comment": created}
