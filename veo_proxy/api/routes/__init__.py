"""API routes."""

from .health import router as health_router
from .video import router as video_router

__all__ = [
    "health_router",
    "video_router",
]
