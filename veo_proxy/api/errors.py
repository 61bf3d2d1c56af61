"""Maps the video generation error taxonomy onto HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..domain.interfaces.video_generator import VideoGenerationError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the ``{"error": ...}`` body shared by every failure."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def video_generation_error_handler(request: Request, exc: VideoGenerationError) -> JSONResponse:
    """Render a VideoGenerationError with its own status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed ({exc.status_code}): {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return error_response(exc.message or GENERIC_ERROR_MESSAGE, exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (404, 405, ...) in the same body shape."""
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, never return it."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(GENERIC_ERROR_MESSAGE, 500)


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application."""
    app.add_exception_handler(VideoGenerationError, video_generation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
