from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from auth import verify_token
from database import get_db
from errors import Forbidden, Unauthenticated

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    """Resolve the bearer token to an existing user id."""
    payload = verify_token(token)
    if not payload or not payload.get("sub"):
        raise Unauthenticated("Invalid token")
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id FROM users WHERE id = ?", (payload["sub"],))
        row = cursor.fetchone()
        if not row:
            raise Unauthenticated("User no longer exists")
        return row[0]


def require_self(user_id: str, current_user_id: str, detail: str = "You can only access your own account."):
    if user_id != current_user_id:
        raise Forbidden(detail)
