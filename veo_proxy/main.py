"""FastAPI application entry point."""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config.settings import get_settings
from .api.errors import register_error_handlers
from .api.routes import health_router, video_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Fail at import time when GEMINI_API_KEY is missing
settings = get_settings()

# Create FastAPI application
app = FastAPI(
    title="Veo Proxy",
    description="Generates videos with Veo and returns the video URI",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(video_router)


@app.on_event("startup")
async def startup_event() -> None:
    """Application startup event."""
    logger.info("=" * 50)
    logger.info("Veo Proxy Starting")
    logger.info(f"Video Model: {settings.veo_video_model}")
    logger.info(f"Aspect Ratio: {settings.veo_aspect_ratio}")
    logger.info(
        f"Polling: every {settings.video_poll_interval}s, "
        f"max {settings.video_poll_max_attempts} attempts "
        f"(~{int(settings.video_poll_budget)}s)"
    )
    logger.info("=" * 50)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """Application shutdown event."""
    logger.info("Veo Proxy Shutting Down")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "veo_proxy.main:app",
        host=settings.service_host,
        port=settings.service_port,
        reload=True,
    )
