# src/mini_social/api/endpoints/comments.py
"""Comment endpoints: threaded replies and likes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from mini_social.api.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from mini_social.schemas.comment import CommentCreate, CommentResponse
from mini_social.services import comment_service
from mini_social.services.likes import toggle_comment_like
from mini_social.services.post_service import get_visible_post

router = APIRouter(prefix="/comments", tags=["comments"])


def _ensure_post_visible(db: Session, post_id: int, viewer_id: int | None) -> None:
    if get_visible_post(db, post_id, viewer_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")


@router.get("/{post_id}", response_model=list[CommentResponse])
def list_comments(
    post_id: int,
    viewer: OptionalUserDep,
    db: SessionDep,
) -> list[CommentResponse]:
    """List a post's comments, oldest first, each with its author's name."""
    _ensure_post_visible(db, post_id, viewer.id if viewer else None)
    comments = comment_service.list_comments(db, post_id)
    return [comment_service.to_comment_response(comment) for comment in comments]


@router.post("/{post_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    post_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post, or reply to one of its comments."""
    _ensure_post_visible(db, post_id, current_user.id)

    if payload.parent_comment_id is not None:
        parent = comment_service.get_comment(db, payload.parent_comment_id)
        if parent is None or parent.post_id != post_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Parent comment not found",
            )

    comment = comment_service.create_comment(
        db,
        post_id=post_id,
        author=current_user,
        content=payload.content,
        parent_comment_id=payload.parent_comment_id,
    )
    return comment_service.to_comment_response(comment)


@router.post("/{comment_id}/like", response_model=list[int])
def like_comment(comment_id: int, current_user: CurrentUserDep, db: SessionDep) -> list[int]:
    """Toggle the caller's like and return the comment's liker ids."""
    comment = comment_service.get_comment(db, comment_id)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    _ensure_post_visible(db, comment.post_id, current_user.id)

    toggle_comment_like(db, comment.id, current_user.id)
    db.commit()
    db.expire(comment)
    return comment.liker_ids
