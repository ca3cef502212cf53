"""Environment-driven settings.

Stdlib plus dotenv only, no app imports, so every module can import it.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


DB_NAME = os.getenv("DB_NAME", "db.sqlite3")
DB_TIMEOUT_SECONDS = _float_env("DB_TIMEOUT_SECONDS", 5.0)

SECRET_KEY = os.getenv("SECRET_KEY", "paper-ball-secret-key")  # Change this in production!
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)  # 7 days

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
MAX_UPLOAD_SIZE = _int_env("MAX_UPLOAD_SIZE", 10 * 1024 * 1024)  # 10MB

DEFAULT_AVATAR_URL = os.getenv(
    "DEFAULT_AVATAR_URL",
    "https://trae-api-sg.mchost.guru/api/ide/v1/text_to_image"
    "?prompt=cute%20cartoon%20avatar%20round%20face%20blue%20background&image_size=square",
)

# Radius is meters everywhere
DEFAULT_SEARCH_RADIUS_METERS = _float_env("DEFAULT_SEARCH_RADIUS_METERS", 1000.0)
MESSAGE_FEED_LIMIT = _int_env("MESSAGE_FEED_LIMIT", 50)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 3001)
