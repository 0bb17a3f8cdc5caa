"""HTTP API routers."""

from .endpoints import (
    auth_router,
    comments_router,
    posts_router,
    stories_router,
    users_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "posts_router",
    "stories_router",
    "users_router",
]
