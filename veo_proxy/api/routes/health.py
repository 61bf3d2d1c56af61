"""Health check endpoint."""

from fastapi import APIRouter, Depends

from ..dependencies import get_video_generator
from ...domain.interfaces.video_generator import VideoGenerator

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(generator: VideoGenerator = Depends(get_video_generator)) -> dict:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    healthy = await generator.health_check()
    return {"status": "healthy" if healthy else "degraded", "service": "veo-proxy"}


@router.get("/")
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        Service information
    """
    return {
        "service": "veo-proxy",
        "version": "0.1.0",
        "description": "Veo video generation proxy",
    }
