"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .common import APIModel, MessageResponse
from .post import LikeUser, PostCreate, PostResponse, PostShare
from .story import StoryCreate, StoryResponse
from .user import AuthResponse, LoginRequest, RegisterRequest, UserResponse

__all__ = [
    "APIModel", "MessageResponse",
    "AuthResponse", "LoginRequest", "RegisterRequest", "UserResponse",
    "CommentCreate", "CommentResponse",
    "LikeUser", "PostCreate", "PostResponse", "PostShare",
    "StoryCreate", "StoryResponse",
]
