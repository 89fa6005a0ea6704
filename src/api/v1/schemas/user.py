"""Pydantic schemas for User and Auth API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """Schema for registering a user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)


class UserLogin(BaseModel):
    """Schema for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access token issued on register or login."""

    token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Schema for User response (never includes the password hash)."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Jane Doe",
                "email": "jane@example.com",
                "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime


class UserDetailResponse(BaseModel):
    """Schema for single User."""

    data: UserResponse
