"""SQLAlchemy models for the Mini Social application."""

from .comment import Comment
from .like import CommentLike, PostLike
from .post import Post
from .story import Story
from .user import User

__all__ = [
    "Comment",
    "CommentLike", "PostLike",
    "Post",
    "Story",
    "User",
]
