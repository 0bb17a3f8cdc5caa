"""Like toggling for posts and comments.

A like-set is stored as association rows keyed by ``(item id, user id)``.
Toggling never rewrites the whole set: it deletes the viewer's row and, if
there was none, inserts it. Concurrent toggles by different viewers touch
different rows and cannot overwrite each other.
"""
from __future__ import annotations

from collections.abc import Set
from typing import Any

from sqlalchemy import delete, insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import InstrumentedAttribute, Session

from mini_social.models import CommentLike, PostLike


def toggle_like_set(likes: Set[int], viewer_id: int) -> frozenset[int]:
    """Return ``likes`` with ``viewer_id`` removed if present, added otherwise."""
    if viewer_id in likes:
        return frozenset(likes - {viewer_id})
    return frozenset(likes | {viewer_id})


def _insert_ignoring_duplicates(db: Session, model: type[Any], values: dict[str, int]) -> None:
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values).on_conflict_do_nothing()
    else:
        stmt = insert(model).values(**values)
    db.execute(stmt)


def _toggle(
    db: Session,
    model: type[Any],
    item_column: InstrumentedAttribute[int],
    item_id: int,
    user_id: int,
) -> bool:
    removed = db.execute(
        delete(model).where(item_column == item_id, model.user_id == user_id)
    ).rowcount
    if removed:
        return False
    _insert_ignoring_duplicates(db, model, {item_column.key: item_id, "user_id": user_id})
    return True


def toggle_post_like(db: Session, post_id: int, user_id: int) -> bool:
    """Flip ``user_id``'s like on a post. Returns True if the post is now liked.

    The caller owns the transaction and must commit.
    """
    return _toggle(db, PostLike, PostLike.post_id, post_id, user_id)


def toggle_comment_like(db: Session, comment_id: int, user_id: int) -> bool:
    """Flip ``user_id``'s like on a comment. Returns True if the comment is now liked."""
    return _toggle(db, CommentLike, CommentLike.comment_id, comment_id, user_id)
