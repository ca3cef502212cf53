from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import FileResponse
from errors import InvalidArgument, NotFound
from file_utils import save_media, get_media_path, get_media_url, is_allowed_media, media_type_for
import settings
from schemas.papers import UploadResponse
from utils.route_helpers import get_current_user_id

router = APIRouter(tags=["uploads"])


@router.post("/api/upload", response_model=UploadResponse)
def upload_media(media: UploadFile = File(...), current_user_id: str = Depends(get_current_user_id)):
    if not is_allowed_media(media.filename):
        raise InvalidArgument("Unsupported file type.")
    content = media.file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise InvalidArgument(f"File exceeds {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB limit.")
    uuid_filename = save_media(content, media.filename)
    return {"success": True, "url": get_media_url(uuid_filename), "type": media_type_for(media.filename)}


@router.get("/uploads/{filename}")
def serve_media(filename: str):
    """Serve uploaded media files"""
    file_path = get_media_path(filename)
    if not file_path:
        raise NotFound("File not found")
    return FileResponse(file_path)
