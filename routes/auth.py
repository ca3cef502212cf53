import logging
from fastapi import APIRouter, Depends
from schemas.auth import RegisterRequest, LoginRequest, AuthResponse, UserResponse
from auth import create_user_token
from stores import users
from utils.route_helpers import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["authentication"])


def auth_response(user: dict) -> AuthResponse:
    return AuthResponse(
        token=create_user_token(user["id"], user["nickname"]),
        user=UserResponse(id=user["id"], nickname=user["nickname"], avatar=user["avatar"])
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(user: RegisterRequest):
    created = users.create_user(user.nickname, user.password, user.avatar)
    return auth_response(created)


@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest):
    user = users.authenticate(login_data.nickname, login_data.password)
    logger.info(f"User {user['id']} logged in")
    return auth_response(user)


@router.get("/me", response_model=UserResponse)
def get_current_user(current_user_id: str = Depends(get_current_user_id)):
    """Get current user information from token"""
    user = users.get_user(current_user_id)
    return UserResponse(id=user["id"], nickname=user["nickname"], avatar=user["avatar"])
