"""Domain interfaces (ports) - abstract contracts for infrastructure."""

from .video_generator import (
    VideoGenerator,
    VideoGenerationError,
    ValidationError,
    GenerationTimeoutError,
    UpstreamError,
    ContractError,
    SubmissionError,
)

__all__ = [
    "VideoGenerator",
    "VideoGenerationError",
    "ValidationError",
    "GenerationTimeoutError",
    "UpstreamError",
    "ContractError",
    "SubmissionError",
]
