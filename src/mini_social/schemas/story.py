"""Story-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field, model_validator

from mini_social.core.settings import settings

from .common import APIModel, Privacy


class StoryCreate(APIModel):
    """Schema for creating a story."""

    content: str | None = Field(None, max_length=1000)
    image_base64: str | None = Field(None, max_length=settings.max_image_base64_length)
    privacy: Privacy | None = None

    @model_validator(mode="after")
    def _require_content_or_image(self) -> "StoryCreate":
        if not (self.content or self.image_base64):
            raise ValueError("A story needs content or an image")
        return self


class StoryResponse(APIModel):
    """Story with its author's display name."""

    id: int = Field(..., alias="_id")
    user_id: int
    user_name: str
    content: str
    image: str
    privacy: Privacy
    created_at: datetime
