"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from ..domain.entities.generation_profile import DEFAULT_VIDEO_MODEL, VideoGenerationProfile


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API key (required - the service refuses to start without it)
    gemini_api_key: str = Field(..., min_length=1)

    # Model Configuration
    veo_video_model: str = DEFAULT_VIDEO_MODEL
    veo_aspect_ratio: Literal["16:9", "9:16"] = "9:16"
    veo_frame_rate: int | None = 30
    veo_resolution: Literal["720p", "1080p"] | None = None
    veo_enhance_prompt: bool | None = None
    veo_generate_audio: bool | None = None
    veo_negative_prompt: str | None = None

    # Polling Configuration
    video_poll_interval: float = Field(default=5.0, gt=0)  # Seconds between status checks
    video_poll_max_attempts: int = Field(default=60, ge=1)  # Status checks before giving up

    # Service Configuration
    service_host: str = "0.0.0.0"
    service_port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def video_poll_budget(self) -> float:
        """Upper bound in seconds spent waiting on a single operation."""
        return self.video_poll_interval * self.video_poll_max_attempts

    def video_profile(self) -> VideoGenerationProfile:
        """Build the generation profile applied to every submission."""
        return VideoGenerationProfile(
            model=self.veo_video_model,
            aspect_ratio=self.veo_aspect_ratio,
            frame_rate=self.veo_frame_rate,
            resolution=self.veo_resolution,
            enhance_prompt=self.veo_enhance_prompt,
            generate_audio=self.veo_generate_audio,
            negative_prompt=self.veo_negative_prompt,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
