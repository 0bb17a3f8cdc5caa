"""Service-level helpers for stories."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mini_social.models import Story, User
from mini_social.schemas.story import StoryResponse
from mini_social.services.visibility import PUBLIC, filter_visible, normalize_privacy


def list_visible_stories(db: Session, viewer_id: int | None) -> list[Story]:
    """Return every story ``viewer_id`` may see, newest first."""
    stories = db.scalars(
        select(Story).order_by(Story.created_at.desc(), Story.id.desc())
    ).unique().all()
    return filter_visible(stories, viewer_id)


def create_story(
    db: Session,
    *,
    author: User,
    content: str | None,
    image_url: str = "",
    privacy: str | None = None,
) -> Story:
    story = Story(
        user_id=author.id,
        content=content or "",
        image=image_url,
        privacy=privacy or PUBLIC,
    )
    db.add(story)
    db.commit()
    db.refresh(story)
    return story


def to_story_response(story: Story) -> StoryResponse:
    return StoryResponse(
        id=story.id,
        user_id=story.user_id,
        user_name=story.author.display_name,
        content=story.content,
        image=story.image or "",
        privacy=normalize_privacy(story.privacy),
        created_at=story.created_at,
    )
