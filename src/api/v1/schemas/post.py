"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for adding a Comment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    """Schema for a Like."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID


class CommentResponse(BaseModel):
    """Schema for a Comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "789e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "text": "Hello, world",
                "name": "Jane Doe",
                "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                "likes": [],
                "comments": [],
                "date": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    date: datetime


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class LikeListResponse(BaseModel):
    """Schema for a post's likes, most recent first."""

    data: list[LikeResponse]
