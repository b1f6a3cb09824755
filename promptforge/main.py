"""Main application file for the PromptForge API service."""

from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi import FastAPI

from promptforge.utils.config import get_settings
from promptforge.routers import analysis, generation, suggestions, catalog, instructions
from promptforge.middleware.rate_limiter import RateLimitMiddleware

# Load settings
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan events.
    """
    # Startup
    logger.info("PromptForge API starting up")
    if settings.generation_configured:
        logger.info("Generation Service configured (default model %s)", settings.openai_model)
    else:
        logger.warning("OPENAI_API_KEY not set: every generation will use the local fallback")

    yield

    # Shutdown (might not run on some serverless platforms)
    logger.info("PromptForge API shutting down")


app = FastAPI(
    title="PromptForge API",
    description="Prompt generation and quality analysis service",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
app.add_middleware(
    RateLimitMiddleware, requests_per_minute=settings.rate_limit_per_minute
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

# Include routers
app.include_router(analysis.router, prefix="/api/v1", tags=["analysis"])
app.include_router(generation.router, prefix="/api/v1", tags=["generation"])
app.include_router(suggestions.router, prefix="/api/v1", tags=["suggestions"])
app.include_router(catalog.router, prefix="/api/v1", tags=["catalog"])
app.include_router(instructions.router, prefix="/api/v1", tags=["instructions"])


@app.get("/")
async def root():
    """Root endpoint providing basic info about the API."""
    return {
        "message": "PromptForge API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "generation_configured": settings.generation_configured,
    }
