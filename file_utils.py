import uuid
import os
from pathlib import Path
from typing import Optional

import settings

IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.webp', '.gif'}
AUDIO_EXTENSIONS = {'.mp3', '.wav', '.m4a', '.ogg', '.aac', '.webm'}
VIDEO_EXTENSIONS = {'.mp4', '.mov', '.avi'}
ALLOWED_MEDIA_EXTENSIONS = IMAGE_EXTENSIONS | AUDIO_EXTENSIONS | VIDEO_EXTENSIONS

MEDIA_URL_PREFIX = "/uploads"


def get_media_folder() -> str:
    return settings.UPLOAD_FOLDER


def ensure_media_directory():
    """Ensure the upload directory exists"""
    Path(get_media_folder()).mkdir(parents=True, exist_ok=True)


def is_allowed_media(filename: str) -> bool:
    return Path(filename or "").suffix.lower() in ALLOWED_MEDIA_EXTENSIONS


def media_type_for(filename: str) -> str:
    """Paper type matching an uploaded file's extension"""
    ext = Path(filename).suffix.lower()
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in VIDEO_EXTENSIONS:
        return "video"
    return "audio"


def generate_uuid_filename(original_filename: str) -> str:
    """Generate a UUID filename with original extension"""
    ext = Path(original_filename).suffix.lower()
    return f"{uuid.uuid4()}{ext}"


def save_media(file_content: bytes, filename: str) -> Optional[str]:
    """Save an uploaded media file and return the UUID filename, or None if it is rejected"""
    if not is_allowed_media(filename) or len(file_content) > settings.MAX_UPLOAD_SIZE:
        return None
    ensure_media_directory()
    uuid_filename = generate_uuid_filename(filename)
    file_path = os.path.join(get_media_folder(), uuid_filename)
    with open(file_path, 'wb') as f:
        f.write(file_content)
    return uuid_filename


def get_media_path(uuid_filename: str) -> Optional[str]:
    """Resolve a stored media file, refusing anything outside the upload folder"""
    if not uuid_filename or os.path.basename(uuid_filename) != uuid_filename:
        return None
    file_path = os.path.join(get_media_folder(), uuid_filename)
    if not os.path.exists(file_path):
        return None
    return file_path


def get_media_url(uuid_filename: str) -> Optional[str]:
    # Relative, so it works behind any host
    if not uuid_filename:
        return None
    return f"{MEDIA_URL_PREFIX}/{uuid_filename}"
