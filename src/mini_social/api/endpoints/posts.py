# src/mini_social/api/endpoints/posts.py
"""Post-related endpoints for the Mini Social API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from mini_social.api.dependencies import (
    CurrentUserDep,
    MediaUploaderDep,
    OptionalUserDep,
    SessionDep,
    upload_inline_image,
)
from mini_social.models import Post
from mini_social.schemas.common import MessageResponse
from mini_social.schemas.post import PostCreate, PostResponse, PostShare
from mini_social.services import post_service
from mini_social.services.likes import toggle_post_like

router = APIRouter(prefix="/posts", tags=["posts"])


def _visible_post_or_404(db: Session, post_id: int, viewer_id: int | None) -> Post:
    post = post_service.get_visible_post(db, post_id, viewer_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get("", response_model=list[PostResponse])
def list_posts(current_user: CurrentUserDep, db: SessionDep) -> list[PostResponse]:
    """List posts visible to the caller, newest first, with liker identities."""
    posts = post_service.list_visible_posts(db, current_user.id)
    return [post_service.to_post_response(post) for post in posts]


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    uploader: MediaUploaderDep,
) -> PostResponse:
    """Create a post, uploading its inline image first.

    Nothing is stored if the upload fails.
    """
    image_url = await upload_inline_image(uploader, payload.image_base64)

    def _store() -> PostResponse:
        post = post_service.create_post(
            db,
            author=current_user,
            content=payload.content,
            image_url=image_url,
            privacy=payload.privacy,
        )
        return post_service.to_post_response(post)

    return await run_in_threadpool(_store)


@router.post(
    "/{post_id}/share",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def share_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    payload: PostShare | None = None,
) -> PostResponse:
    """Publish a copy of an existing post that references the original."""
    original = _visible_post_or_404(db, post_id, current_user.id)
    shared = post_service.share_post(
        db,
        original,
        current_user,
        privacy=payload.privacy if payload else None,
    )
    return post_service.to_post_response(shared)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, viewer: OptionalUserDep, db: SessionDep) -> PostResponse:
    """Get a single post. Private posts are only returned to their author."""
    post = _visible_post_or_404(db, post_id, viewer.id if viewer else None)
    return post_service.to_post_response(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    post = _visible_post_or_404(db, post_id, current_user.id)
    if post.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this post",
        )

    post_service.delete_post(db, post)
    return MessageResponse(message="Post removed")


@router.post("/{post_id}/like", response_model=PostResponse)
def like_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> PostResponse:
    """Toggle the caller's like and return the post with liker identities."""
    post = _visible_post_or_404(db, post_id, current_user.id)
    toggle_post_like(db, post.id, current_user.id)
    db.commit()
    db.expire(post)
    return post_service.to_post_response(post)
