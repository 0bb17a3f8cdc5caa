"""SQLAlchemy model for threaded comments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mini_social.db.session import Base
from mini_social.db.time import utcnow

from .like import CommentLike

if TYPE_CHECKING:
    from .user import User


class Comment(Base):
    """Comment on a post, optionally replying to another comment."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Not a foreign key: comments reference posts by id only.
    post_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[CommentLike]] = relationship(
        CommentLike,
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=(CommentLike.created_at, CommentLike.user_id),
    )

    @property
    def liker_ids(self) -> list[int]:
        return [like.user_id for like in self.likes]
