"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field, model_validator

from mini_social.core.settings import settings

from .common import APIModel, Privacy


class PostCreate(APIModel):
    """Schema for creating a new post."""

    content: str | None = Field(None, max_length=5000, description="Post text")
    image_base64: str | None = Field(
        None,
        max_length=settings.max_image_base64_length,
        description="Inline base64 image uploaded to the image host",
    )
    privacy: Privacy | None = Field(None, description="Defaults to public")

    @model_validator(mode="after")
    def _require_content_or_image(self) -> "PostCreate":
        if not (self.content or self.image_base64):
            raise ValueError("A post needs content or an image")
        return self


class PostShare(APIModel):
    """Optional body accepted when sharing a post."""

    privacy: Privacy | None = None


class LikeUser(APIModel):
    """Identity of a user who liked an item."""

    id: int = Field(..., alias="_id")
    firstname: str
    lastname: str


class PostResponse(APIModel):
    """Schema for post information returned by the API."""

    id: int = Field(..., alias="_id")
    user_id: int
    poster_name: str
    content: str | None
    image: str
    privacy: Privacy
    likes: list[int]
    like_users: list[LikeUser]
    shared_from: int | None = None
    created_at: datetime
