from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional

from stickerdiary.user.models import Role

# bcrypt는 72바이트까지만 사용한다
PASSWORD_MAX_BYTES = 72


# Request
class SignUpRequest(BaseModel):
    email: EmailStr = Field(max_length=100)
    password: str = Field(min_length=1, max_length=PASSWORD_MAX_BYTES)
    nickname: str = Field(min_length=2, max_length=20)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"비밀번호는 {PASSWORD_MAX_BYTES}바이트를 넘을 수 없습니다.")
        return value

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class UserUpdateRequest(BaseModel):
    nickname: Optional[str] = Field(default=None, min_length=2, max_length=20)
    bio: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

# Response
class UserResponse(BaseModel):
    id: int
    email: str
    nickname: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role
    onboarding_completed: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str

class LoginResponse(TokenResponse):
    user: UserResponse
