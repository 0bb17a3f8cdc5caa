"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import APIModel


class CommentCreate(APIModel):
    """Schema for creating a comment or a reply."""

    content: str = Field(..., min_length=1, max_length=2000)
    parent_comment_id: int | None = Field(None, description="Comment being replied to")


class CommentResponse(APIModel):
    """Comment with its author's display name."""

    id: int = Field(..., alias="_id")
    post_id: int
    user_id: int
    user_name: str
    content: str | None
    parent_comment_id: int | None
    likes: list[int]
    created_at: datetime
