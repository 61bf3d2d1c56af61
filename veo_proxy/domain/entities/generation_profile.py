"""Video generation profile - the fixed options applied to every submission."""

from dataclasses import dataclass


# Aspect ratios accepted by the Veo models
VALID_ASPECT_RATIOS = {"16:9", "9:16"}

# Resolutions accepted by the Veo 3 models
VALID_RESOLUTIONS = {"720p", "1080p"}

DEFAULT_VIDEO_MODEL = "veo-3.0-generate-001"


@dataclass(frozen=True)
class VideoGenerationProfile:
    """
    Settings for video generation with Veo models.

    A request may override the model, aspect ratio and negative prompt;
    everything else is taken from the profile as-is. Options left as None
    are not sent to the service.
    """
    # Model used when the request does not name one
    model: str = DEFAULT_VIDEO_MODEL

    # Default aspect ratio for generated videos
    aspect_ratio: str = "9:16"

    # Frames per second
    frame_rate: int | None = 30

    # Quality hints
    resolution: str | None = None
    enhance_prompt: bool | None = None
    generate_audio: bool | None = None

    # Negative prompt used when the request has none
    negative_prompt: str | None = None

    # Videos per operation (only the first one is returned)
    number_of_videos: int = 1

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.model or not self.model.strip():
            raise ValueError("model cannot be empty")
        if self.aspect_ratio not in VALID_ASPECT_RATIOS:
            raise ValueError(f"aspect_ratio must be one of: {', '.join(sorted(VALID_ASPECT_RATIOS))}")
        if self.frame_rate is not None and self.frame_rate < 1:
            raise ValueError("frame_rate must be at least 1")
        if self.resolution is not None and self.resolution not in VALID_RESOLUTIONS:
            raise ValueError(f"resolution must be one of: {', '.join(sorted(VALID_RESOLUTIONS))}")
        if self.number_of_videos < 1:
            raise ValueError("number_of_videos must be at least 1")
