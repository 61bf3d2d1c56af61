"""Veo video generation implementation using the Gemini API."""

import asyncio
import base64
import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai.types import GenerateVideosConfig, GenerateVideosOperation, Image

from ...config.settings import get_settings
from ...domain.entities.generation_profile import VideoGenerationProfile
from ...domain.entities.generation_request import GenerationRequest, ReferenceImage
from ...domain.entities.operation_status import (
    FailedStatus,
    OperationStatus,
    PendingStatus,
    SucceededStatus,
)
from ...domain.interfaces.video_generator import (
    SubmissionError,
    UpstreamError,
    VideoGenerator,
)

logger = logging.getLogger(__name__)


def _error_message(exception: Exception) -> str:
    """Best human-readable message for an SDK or transport failure."""
    if isinstance(exception, genai_errors.APIError) and exception.message:
        return exception.message
    return str(exception) or exception.__class__.__name__


def _operation_error_message(error: Any) -> str:
    """Extract the message from an operation's error payload."""
    if isinstance(error, dict):
        message = error.get("message")
    else:
        message = getattr(error, "message", None)
    return message or "Unknown error"


class VeoVideoGenerator(VideoGenerator):
    """
    Video generator using Veo models via the Gemini API.

    Uses the google-genai SDK. Submission and status checks are plain SDK
    calls run in the default executor; polling is left to the caller.
    """

    def __init__(
        self,
        client: genai.Client | None = None,
        profile: VideoGenerationProfile | None = None,
    ) -> None:
        """Initialize the Veo video generator."""
        if client is None or profile is None:
            settings = get_settings()
            client = client or genai.Client(api_key=settings.gemini_api_key)
            profile = profile or settings.video_profile()

        self._client = client
        self._profile = profile

        logger.info(
            f"Initialized VeoVideoGenerator with model: {self._profile.model}, "
            f"aspect_ratio: {self._profile.aspect_ratio}, "
            f"frame_rate: {self._profile.frame_rate}"
        )

    def _build_config(self, request: GenerationRequest) -> GenerateVideosConfig:
        """Merge the request overrides into the profile options."""
        profile = self._profile

        config_params: dict[str, Any] = {
            "aspect_ratio": request.aspect_ratio or profile.aspect_ratio,
            "number_of_videos": profile.number_of_videos,
        }

        if profile.frame_rate is not None:
            config_params["fps"] = profile.frame_rate
        if request.duration_seconds is not None:
            # The API only takes whole seconds
            config_params["duration_seconds"] = max(1, round(request.duration_seconds))

        negative_prompt = request.negative_prompt or profile.negative_prompt
        if negative_prompt:
            config_params["negative_prompt"] = negative_prompt

        # Quality hints
        if profile.resolution is not None:
            config_params["resolution"] = profile.resolution
        if profile.enhance_prompt is not None:
            config_params["enhance_prompt"] = profile.enhance_prompt
        if profile.generate_audio is not None:
            config_params["generate_audio"] = profile.generate_audio

        return GenerateVideosConfig(**config_params)

    @staticmethod
    def _build_image(image: ReferenceImage | None) -> Image | None:
        if image is None:
            return None
        return Image(image_bytes=base64.b64decode(image.data), mime_type=image.mime_type)

    async def submit(self, request: GenerationRequest) -> str:
        """
        Start a Veo generation job.

        Exactly one submission call is made; failures are not retried.

        Args:
            request: Normalized generation request

        Returns:
            Operation name of the started job
        """
        model = request.model or self._profile.model
        config = self._build_config(request)
        image = self._build_image(request.image)

        logger.info(
            f"Submitting video generation with prompt: {request.prompt[:100]}... "
            f"(model={model}, aspect_ratio={config.aspect_ratio}, "
            f"duration={config.duration_seconds}, image={image is not None})"
        )

        def _start():
            return self._client.models.generate_videos(
                model=model,
                prompt=request.prompt,
                image=image,
                config=config,
            )

        try:
            loop = asyncio.get_event_loop()
            operation = await loop.run_in_executor(None, _start)
        except Exception as e:
            logger.error(f"Video generation submission failed: {e}")
            raise UpstreamError(_error_message(e), e)

        operation_name = getattr(operation, "name", None)
        if not operation_name:
            logger.error("Video generation submission returned no operation name")
            raise SubmissionError("Operation did not return a name")

        logger.info(f"Video generation started: {operation_name}")
        return operation_name

    async def get_status(self, operation_name: str) -> OperationStatus:
        """
        Fetch the status of a Veo generation job.

        Args:
            operation_name: Operation name returned by ``submit``

        Returns:
            The job status mapped onto the domain status types
        """
        def _get():
            return self._client.operations.get(GenerateVideosOperation(name=operation_name))

        try:
            loop = asyncio.get_event_loop()
            operation = await loop.run_in_executor(None, _get)
        except Exception as e:
            logger.error(f"Fetching status of {operation_name} failed: {e}")
            raise UpstreamError(_error_message(e), e)

        return self._to_status(operation)

    @staticmethod
    def _to_status(operation: GenerateVideosOperation) -> OperationStatus:
        """Map an SDK operation onto PendingStatus, SucceededStatus or FailedStatus."""
        if not operation.done:
            return PendingStatus()

        if operation.error:
            return FailedStatus(message=_operation_error_message(operation.error))

        response = operation.response
        generated_videos = response.generated_videos if response else None

        if not generated_videos:
            # Check for RAI filtered content
            filtered_count = getattr(response, "rai_media_filtered_count", None) or 0
            if filtered_count > 0:
                reasons = getattr(response, "rai_media_filtered_reasons", None) or []
                reason_str = reasons[0] if reasons else "content policy violation"
                return FailedStatus(message=f"Video was filtered due to content policy: {reason_str}")
            return SucceededStatus(video_uri=None)

        video = generated_videos[0].video
        return SucceededStatus(video_uri=video.uri if video else None)

    async def health_check(self) -> bool:
        """Check if the Veo service is available."""
        # No cheap read-only call exists, so only the client is checked
        return self._client is not None
