"""Service-level helpers for threaded comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from mini_social.models import Comment, User
from mini_social.schemas.comment import CommentResponse


def list_comments(db: Session, post_id: int) -> list[Comment]:
    """Return a post's comments and replies, oldest first."""
    return list(
        db.scalars(
            select(Comment)
            .where(Comment.post_id == post_id)
            .options(selectinload(Comment.likes))
            .order_by(Comment.created_at, Comment.id)
        ).unique()
    )


def get_comment(db: Session, comment_id: int) -> Comment | None:
    return db.get(Comment, comment_id)


def create_comment(
    db: Session,
    *,
    post_id: int,
    author: User,
    content: str,
    parent_comment_id: int | None = None,
) -> Comment:
    comment = Comment(
        post_id=post_id,
        user_id=author.id,
        content=content,
        parent_comment_id=parent_comment_id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def to_comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        user_name=comment.author.display_name,
        content=comment.content,
        parent_comment_id=comment.parent_comment_id,
        likes=comment.liker_ids,
        created_at=comment.created_at,
    )
