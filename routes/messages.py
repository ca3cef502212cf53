from fastapi import APIRouter, Depends
from schemas.shared import SuccessResponse
from stores import messages
from utils.route_helpers import get_current_user_id

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.put("/{message_id}/read", response_model=SuccessResponse)
def mark_message_read(message_id: str, current_user_id: str = Depends(get_current_user_id)):
    """Idempotent: marking an already read message succeeds again."""
    messages.mark_read(message_id, current_user_id)
    return {"success": True}
