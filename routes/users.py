from fastapi import APIRouter, Depends, Query
from schemas.auth import (
    NicknameUpdate, NicknameUpdateResponse, AvatarUpdate, AvatarUpdateResponse, NicknameAvailabilityResponse
)
from schemas.papers import PaperListEnvelope
from schemas.messages import MessageListEnvelope, UnreadCountResponse
import settings
from stores import users, papers, messages
from utils.route_helpers import get_current_user_id, require_self

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/check-nickname/{nickname}", response_model=NicknameAvailabilityResponse)
def check_nickname(nickname: str):
    return {"success": True, "available": users.is_nickname_available(nickname.strip())}


@router.get("/{user_id}/papers", response_model=PaperListEnvelope)
def get_user_papers(user_id: str, current_user_id: str = Depends(get_current_user_id)):
    return {"success": True, "papers": papers.list_by_author(user_id)}


@router.get("/{user_id}/commented-papers", response_model=PaperListEnvelope)
def get_user_commented_papers(user_id: str, current_user_id: str = Depends(get_current_user_id)):
    return {"success": True, "papers": papers.list_commented_by_user(user_id)}


@router.put("/{user_id}/avatar", response_model=AvatarUpdateResponse)
def update_avatar(user_id: str, body: AvatarUpdate, current_user_id: str = Depends(get_current_user_id)):
    require_self(user_id, current_user_id, "You can only change your own avatar.")
    return {"success": True, "avatar": users.update_avatar(user_id, body.avatar)}


@router.put("/{user_id}/nickname", response_model=NicknameUpdateResponse)
def update_nickname(user_id: str, body: NicknameUpdate, current_user_id: str = Depends(get_current_user_id)):
    require_self(user_id, current_user_id, "You can only change your own nickname.")
    return {"success": True, "nickname": users.update_nickname(user_id, body.nickname)}


@router.get("/{user_id}/messages", response_model=MessageListEnvelope)
def get_messages(
    user_id: str,
    limit: int = Query(settings.MESSAGE_FEED_LIMIT, ge=1, le=settings.MESSAGE_FEED_LIMIT),
    current_user_id: str = Depends(get_current_user_id)
):
    require_self(user_id, current_user_id, "You can only read your own messages.")
    return {"success": True, "messages": messages.list_for_user(user_id, limit=limit)}


@router.get("/{user_id}/unread-count", response_model=UnreadCountResponse)
def get_unread_count(user_id: str, current_user_id: str = Depends(get_current_user_id)):
    require_self(user_id, current_user_id, "You can only read your own messages.")
    return {"success": True, "count": messages.count_unread(user_id)}
