"""
MockPrep - AI-Assisted Mock Interview Platform

Main application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mockprep.config.settings import get_settings
from mockprep.api.router import api_router
from mockprep.api.dependencies import cleanup

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting MockPrep...")
    settings = get_settings()
    logger.info(f"Running in {'debug' if settings.debug else 'production'} mode")
    logger.info(f"Feedback fallback policy: {settings.fallback_policy.value}")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set, evaluations will fail")

    yield

    # Shutdown
    logger.info("Shutting down MockPrep...")
    await cleanup()


# Create FastAPI application
settings = get_settings()

app = FastAPI(
    title="MockPrep",
    description="AI-Assisted Mock Interview Platform",
    version=settings.app_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
