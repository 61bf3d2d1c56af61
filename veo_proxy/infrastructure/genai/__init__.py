"""Google GenAI implementations."""

from .operation_poller import OperationPoller
from .veo_video_generator import VeoVideoGenerator

__all__ = ["OperationPoller", "VeoVideoGenerator"]
