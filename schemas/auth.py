from pydantic import validator
from typing import Optional
from schemas.shared import CamelModel, SuccessResponse


class RegisterRequest(CamelModel):
    nickname: str
    password: str
    avatar: Optional[str] = None

    @validator('password')
    def validate_password(cls, v):
        if not v:
            raise ValueError('Password cannot be empty')
        return v


class LoginRequest(CamelModel):
    nickname: str
    password: str


class UserResponse(CamelModel):
    id: str
    nickname: str
    avatar: Optional[str] = None


class AuthResponse(SuccessResponse):
    token: str
    user: UserResponse


class NicknameUpdate(CamelModel):
    nickname: str


class NicknameUpdateResponse(SuccessResponse):
    nickname: str


class AvatarUpdate(CamelModel):
    avatar: str


class AvatarUpdateResponse(SuccessResponse):
    avatar: str


class NicknameAvailabilityResponse(SuccessResponse):
    available: bool
