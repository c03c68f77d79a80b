"""
FastAPI Application - Truck Parts Chat

Main entry point for the API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from truckparts import __version__
from truckparts.config import get_settings
from truckparts.core.catalog import close_catalog_client
from truckparts.core.dialogue import close_dialogue_client

settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events - startup and shutdown

    HTTP clients are created lazily and closed here.
    """
    configure_logging(settings.LOG_LEVEL)

    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"   Environment: {settings.ENVIRONMENT}")
    logger.info(f"   Dialogue backend: {settings.DIALOGUE_BACKEND_URL}")
    logger.info(f"   Catalog API: {settings.CATALOG_API_URL}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_dialogue_client()
    await close_catalog_client()
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Web tier for the truck parts chatbot",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Session-ID"],
)


@app.get("/")
async def root():
    """Service banner"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT
    }


# Import and include routers
from truckparts.api import chat, diagnostics, health  # noqa: E402

app.include_router(chat.router, prefix=settings.API_PREFIX, tags=["chat"])
app.include_router(health.router, prefix=settings.API_PREFIX, tags=["health"])
app.include_router(diagnostics.router, prefix=settings.API_PREFIX, tags=["diagnostics"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "truckparts.main:app",
        host="0.0.0.0",
        port=3000,
        reload=settings.DEBUG
    )
