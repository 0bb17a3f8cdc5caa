"""SQLAlchemy model for posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mini_social.db.session import Base
from mini_social.db.time import utcnow

from .like import PostLike

if TYPE_CHECKING:
    from .user import User


class Post(Base):
    """Primary content entity produced by users."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # "public", "private" or NULL; NULL reads as public.
    privacy: Mapped[str | None] = mapped_column(String(16), nullable=True, default="public")
    # Reference to the shared post; kept as a plain id so shares outlive the original.
    shared_from: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[PostLike]] = relationship(
        PostLike,
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=(PostLike.created_at, PostLike.user_id),
    )

    @property
    def liker_ids(self) -> list[int]:
        return [like.user_id for like in self.likes]

    @property
    def likers(self) -> list[User]:
        return [like.user for like in self.likes]
