"""Auth schemas for requests and responses"""

from pydantic import BaseModel, EmailStr, Field

from app.utils.constants import MIN_PASSWORD_LENGTH


class LoginRequest(BaseModel):
    """Login with email or username"""
    email: str = Field(min_length=1, description="Email address or username")
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)


class UserPublic(BaseModel):
    """Public user projection"""
    # Guest accounts live under the reserved demo.local domain, which
    # EmailStr rejects, so this stays a plain string.
    id: int
    email: str
    username: str | None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Token response shared by login, register and guest login"""
    access_token: str
    user: UserPublic


class TokenPayload(BaseModel):
    """Decoded bearer token claims"""
    sub: str
    email: str
    iat: int
    exp: int
