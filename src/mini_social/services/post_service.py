"""Service-level helpers for reading, creating and removing posts."""
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from mini_social.models import Comment, Post, User
from mini_social.schemas.post import LikeUser, PostResponse
from mini_social.services.visibility import PUBLIC, filter_visible, is_visible, normalize_privacy


def list_visible_posts(db: Session, viewer_id: int | None) -> list[Post]:
    """Return every post ``viewer_id`` may see, newest first."""
    posts = db.scalars(
        select(Post)
        .options(selectinload(Post.likes))
        .order_by(Post.created_at.desc(), Post.id.desc())
    ).unique().all()
    return filter_visible(posts, viewer_id)


def get_visible_post(db: Session, post_id: int, viewer_id: int | None) -> Post | None:
    """Return the post if it exists and ``viewer_id`` may see it.

    A private post is indistinguishable from a missing one to other viewers.
    """
    post = db.get(Post, post_id)
    if post is None or not is_visible(post, viewer_id):
        return None
    return post


def create_post(
    db: Session,
    *,
    author: User,
    content: str | None,
    image_url: str = "",
    privacy: str | None = None,
    shared_from: int | None = None,
) -> Post:
    """Insert a new post authored by ``author`` and return it."""
    post = Post(
        user_id=author.id,
        content=content,
        image=image_url,
        privacy=privacy or PUBLIC,
        shared_from=shared_from,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def share_post(db: Session, original: Post, sharer: User, privacy: str | None = None) -> Post:
    """Re-publish ``original``'s content as a new post owned by ``sharer``."""
    return create_post(
        db,
        author=sharer,
        content=original.content,
        image_url=original.image,
        privacy=privacy,
        shared_from=original.id,
    )


def delete_post(db: Session, post: Post) -> None:
    """Remove a post together with its likes and comments."""
    db.execute(delete(Comment).where(Comment.post_id == post.id))
    db.delete(post)
    db.commit()


def to_post_response(post: Post) -> PostResponse:
    """Convert a Post ORM instance to an API schema with liker identities."""
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        poster_name=post.author.display_name,
        content=post.content,
        image=post.image or "",
        privacy=normalize_privacy(post.privacy),
        likes=post.liker_ids,
        like_users=[
            LikeUser(id=user.id, firstname=user.firstname, lastname=user.lastname)
            for user in post.likers
        ],
        shared_from=post.shared_from,
        created_at=post.created_at,
    )
