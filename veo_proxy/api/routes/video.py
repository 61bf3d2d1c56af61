"""Veo video generation API endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ..dependencies import get_operation_poller, get_video_generator
from ..request_normalizer import normalize_request
from ...domain.entities.operation_status import FailedStatus
from ...domain.interfaces.video_generator import (
    ContractError,
    UpstreamError,
    VideoGenerationError,
    VideoGenerator,
)
from ...infrastructure.genai.operation_poller import OperationPoller

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/veo", tags=["videos"])


# Response Models
class VideoGenerateResponse(BaseModel):
    """Response model for a completed video generation."""
    uri: str = Field(..., description="URI of the generated video")


class VideoSubmitResponse(BaseModel):
    """Response model for a submitted, not yet finished, generation."""
    name: str = Field(..., description="Operation name to poll for the result")


class OperationStatusResponse(BaseModel):
    """Response model for a single status check."""
    name: str = Field(..., description="Operation name")
    done: bool = Field(..., description="Whether the operation has finished")
    uri: str | None = Field(None, description="URI of the generated video once done")


class ErrorResponse(BaseModel):
    """Body returned with every 4xx/5xx response."""
    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Generation failed"},
}


@router.post(
    "/generate",
    response_model=VideoGenerateResponse,
    responses={**ERROR_RESPONSES, 504: {"model": ErrorResponse, "description": "Generation timed out"}},
)
async def generate_video(
    request: Request,
    generator: VideoGenerator = Depends(get_video_generator),
    poller: OperationPoller = Depends(get_operation_poller),
) -> VideoGenerateResponse:
    """
    Generate a video and wait for it to finish.

    Accepts a JSON body or a multipart form. This is a long-running call:
    the operation is polled until it completes or the poll budget
    (5 minutes by default) runs out, in which case 504 is returned and
    the job may still finish on the service side.

    Returns:
        URI of the generated video
    """
    generation_request = await normalize_request(request)

    try:
        operation_name = await generator.submit(generation_request)
        video_uri = await poller.wait(operation_name)
    except VideoGenerationError:
        raise
    except Exception as e:
        logger.exception("Video generation failed unexpectedly")
        raise UpstreamError(f"Failed to generate video: {str(e)}", e)

    logger.info(f"Video generated successfully: {video_uri}")
    return VideoGenerateResponse(uri=video_uri)


@router.post("/submit", response_model=VideoSubmitResponse, responses=ERROR_RESPONSES)
async def submit_video(
    request: Request,
    generator: VideoGenerator = Depends(get_video_generator),
) -> VideoSubmitResponse:
    """
    Start a video generation without waiting for it.

    Poll ``GET /api/veo/operations/{name}`` for the result.

    Returns:
        Operation name of the started job
    """
    generation_request = await normalize_request(request)

    try:
        operation_name = await generator.submit(generation_request)
    except VideoGenerationError:
        raise
    except Exception as e:
        logger.exception("Video submission failed unexpectedly")
        raise UpstreamError(f"Failed to submit video: {str(e)}", e)

    return VideoSubmitResponse(name=operation_name)


@router.get("/operations/{name:path}", response_model=OperationStatusResponse, responses=ERROR_RESPONSES)
async def get_operation(
    name: str,
    generator: VideoGenerator = Depends(get_video_generator),
) -> OperationStatusResponse:
    """
    Check a submitted operation once.

    Returns:
        ``done: false`` while the job runs, ``done: true`` with the URI once it succeeded
    """
    try:
        status = await generator.get_status(name)
    except VideoGenerationError:
        raise
    except Exception as e:
        logger.exception(f"Status check of {name} failed unexpectedly")
        raise UpstreamError(f"Failed to fetch operation status: {str(e)}", e)

    if not status.done:
        return OperationStatusResponse(name=name, done=False)

    if isinstance(status, FailedStatus):
        raise UpstreamError(status.message or "Unknown error")

    if not status.video_uri:
        raise ContractError("No video URI returned")

    return OperationStatusResponse(name=name, done=True, uri=status.video_uri)
