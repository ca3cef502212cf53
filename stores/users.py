import logging
import sqlite3
from typing import Optional

import settings
from auth import hash_password, verify_password
from database import get_db, new_id, utc_now
from errors import Conflict, InvalidArgument, NotFound, Unauthenticated

logger = logging.getLogger(__name__)

NICKNAME_MIN_LENGTH = 2
NICKNAME_MAX_LENGTH = 20


def validate_nickname(nickname: Optional[str]) -> str:
    """Return the trimmed nickname or raise InvalidArgument."""
    nickname = (nickname or "").strip()
    if not nickname:
        raise InvalidArgument("Nickname cannot be empty")
    if not NICKNAME_MIN_LENGTH <= len(nickname) <= NICKNAME_MAX_LENGTH:
        raise InvalidArgument(
            f"Nickname must be between {NICKNAME_MIN_LENGTH} and {NICKNAME_MAX_LENGTH} characters"
        )
    return nickname


def _row_to_user(row):
    return {"id": row[0], "nickname": row[1], "avatar": row[2], "created_at": row[3]}


def get_user(user_id: str):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, nickname, avatar, created_at FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFound("User not found")
        return _row_to_user(row)


def get_user_by_nickname(nickname: str, include_password=False):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, nickname, avatar, created_at, password FROM users WHERE nickname = ?",
            (nickname,)
        )
        row = cursor.fetchone()
        if not row:
            return None
        user = _row_to_user(row)
        if include_password:
            user["password"] = row[4]
        return user


def is_nickname_available(nickname: str, exclude_user_id: Optional[str] = None) -> bool:
    with get_db() as conn:
        cursor = conn.cursor()
        if exclude_user_id:
            cursor.execute("SELECT 1 FROM users WHERE nickname = ? AND id != ?", (nickname, exclude_user_id))
        else:
            cursor.execute("SELECT 1 FROM users WHERE nickname = ?", (nickname,))
        return cursor.fetchone() is None


def create_user(nickname: str, password: str, avatar: Optional[str] = None):
    nickname = validate_nickname(nickname)
    if not password:
        raise InvalidArgument("Password cannot be empty")
    if not is_nickname_available(nickname):
        raise Conflict("Nickname already taken")

    user_id = new_id()
    user_avatar = avatar or settings.DEFAULT_AVATAR_URL
    created_at = utc_now()
    hashed = hash_password(password)
    with get_db() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO users (id, nickname, password, avatar, created_at) VALUES (?, ?, ?, ?, ?)",
                (user_id, nickname, hashed, user_avatar, created_at)
            )
        except sqlite3.IntegrityError:
            # Lost a registration race on the UNIQUE nickname
            raise Conflict("Nickname already taken")
        conn.commit()
    logger.info(f"Registered user {user_id}")
    return {"id": user_id, "nickname": nickname, "avatar": user_avatar, "created_at": created_at}


def authenticate(nickname: str, password: str):
    if not nickname or not password:
        raise InvalidArgument("Nickname and password cannot be empty")
    user = get_user_by_nickname(nickname.strip(), include_password=True)
    if not user or not verify_password(password, user["password"]):
        raise Unauthenticated("Incorrect nickname or password")
    user.pop("password")
    return user


def update_nickname(user_id: str, nickname: str) -> str:
    nickname = validate_nickname(nickname)
    if not is_nickname_available(nickname, exclude_user_id=user_id):
        raise Conflict("Nickname already taken")
    with get_db() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("UPDATE users SET nickname = ? WHERE id = ?", (nickname, user_id))
        except sqlite3.IntegrityError:
            raise Conflict("Nickname already taken")
        if cursor.rowcount == 0:
            raise NotFound("User not found")
        conn.commit()
    return nickname


def update_avatar(user_id: str, avatar: str) -> str:
    if not avatar or not avatar.strip():
        raise InvalidArgument("Avatar cannot be empty")
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("UPDATE users SET avatar = ? WHERE id = ?", (avatar, user_id))
        if cursor.rowcount == 0:
            raise NotFound("User not found")
        conn.commit()
    return avatar
