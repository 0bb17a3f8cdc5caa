"""Business logic services for the Mini Social application."""

from .media import ImageHostClient, UploadFailedError
from .rate_limit import RateLimitService

__all__ = [
    "ImageHostClient",
    "RateLimitService",
    "UploadFailedError",
]
