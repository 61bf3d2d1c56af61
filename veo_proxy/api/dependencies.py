"""FastAPI dependency injection setup."""

import logging

from fastapi import Depends

from ..config.settings import get_settings
from ..domain.interfaces.video_generator import VideoGenerator
from ..infrastructure.genai.operation_poller import OperationPoller
from ..infrastructure.genai.veo_video_generator import VeoVideoGenerator

logger = logging.getLogger(__name__)

# Singleton instances
_video_generator: VideoGenerator | None = None


def get_video_generator() -> VideoGenerator:
    """
    Get the video generator singleton.

    Returns:
        VideoGenerator implementation (Veo)
    """
    global _video_generator
    if _video_generator is None:
        _video_generator = VeoVideoGenerator()
    return _video_generator


def get_operation_poller(
    generator: VideoGenerator = Depends(get_video_generator),
) -> OperationPoller:
    """
    Get a poller bound to the video generator's status call.

    Returns:
        OperationPoller using the configured interval and attempt budget
    """
    settings = get_settings()
    return OperationPoller(
        generator.get_status,
        poll_interval=settings.video_poll_interval,
        max_attempts=settings.video_poll_max_attempts,
    )


def reset_dependencies() -> None:
    """Reset all dependencies (useful for testing)."""
    global _video_generator
    _video_generator = None
