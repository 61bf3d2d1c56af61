"""Domain entities."""

from .generation_profile import (
    VideoGenerationProfile,
    VALID_ASPECT_RATIOS,
    VALID_RESOLUTIONS,
    DEFAULT_VIDEO_MODEL,
)
from .generation_request import GenerationRequest, ReferenceImage
from .operation_status import OperationStatus, PendingStatus, SucceededStatus, FailedStatus

__all__ = [
    "VideoGenerationProfile",
    "VALID_ASPECT_RATIOS",
    "VALID_RESOLUTIONS",
    "DEFAULT_VIDEO_MODEL",
    "GenerationRequest",
    "ReferenceImage",
    "OperationStatus",
    "PendingStatus",
    "SucceededStatus",
    "FailedStatus",
]
