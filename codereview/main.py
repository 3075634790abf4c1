"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from codereview import __version__
from codereview.analyzers.llm_analyzer import DEFAULT_PROFILES
from codereview.api import review
from codereview.config.settings import settings
from codereview.services.rag_service import rag_service
from codereview.utils.logging import setup_observability

# Setup logging and observability
setup_observability()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting code review service in {settings.environment} environment")
    if settings.logfire_token:
        logger.info("Logfire observability enabled")
    if not rag_service.is_available():
        logger.warning("Knowledge base unavailable, analyzers run without standards")

    yield

    # Shutdown
    logger.info("Shutting down code review service")


# Create FastAPI app
app = FastAPI(
    title="Code Review Service",
    description="Multi-analyzer code review of unified diffs using Pydantic AI and OpenAI",
    version=__version__,
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire if configured
if settings.logfire_token:
    import logfire

    logfire.instrument_fastapi(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(review.router)


@app.get("/health")
async def health_check() -> dict[str, str | bool | int]:
    """Health check endpoint with configuration status."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": __version__,
        "openai_configured": bool(settings.openai_api_key),
        "github_token_configured": bool(settings.github_token),
        "knowledge_base_available": rag_service.is_available(),
        "logfire_enabled": bool(settings.logfire_token),
        "analyzers": len(DEFAULT_PROFILES),
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "message": "Code Review Service API",
        "docs": "/docs",
        "health": "/health",
        "review_diff": "/review/diff",
        "review_pr": "/review/pr",
        "backend_check": "/review/debug/ai",
    }
