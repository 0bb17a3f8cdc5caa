# src/mini_social/api/endpoints/stories.py
"""Story endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.concurrency import run_in_threadpool

from mini_social.api.dependencies import (
    CurrentUserDep,
    MediaUploaderDep,
    SessionDep,
    upload_inline_image,
)
from mini_social.schemas.story import StoryCreate, StoryResponse
from mini_social.services import story_service

router = APIRouter(prefix="/stories", tags=["stories"])


@router.get("", response_model=list[StoryResponse])
def list_stories(current_user: CurrentUserDep, db: SessionDep) -> list[StoryResponse]:
    """List stories visible to the caller, newest first."""
    stories = story_service.list_visible_stories(db, current_user.id)
    return [story_service.to_story_response(story) for story in stories]


@router.post("", response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    payload: StoryCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    uploader: MediaUploaderDep,
) -> StoryResponse:
    """Create a story, uploading its inline image first."""
    image_url = await upload_inline_image(uploader, payload.image_base64)

    def _store() -> StoryResponse:
        story = story_service.create_story(
            db,
            author=current_user,
            content=payload.content,
            image_url=image_url,
            privacy=payload.privacy,
        )
        return story_service.to_story_response(story)

    return await run_in_threadpool(_store)
