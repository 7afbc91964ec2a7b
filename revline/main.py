"""FastAPI main application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .config import settings
from .services.log_manager import LogManager
from .utils.logger import init_app_logger
from .api.v1 import logs


# Initialize logger
logger = init_app_logger(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    logger.info("=" * 70)
    logger.info("Starting revline log service...")
    logger.info("=" * 70)

    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")
    logger.info(f"  Debug: {settings.debug}")
    logger.info(f"  Log Level: {settings.log_level}")
    logger.info(f"  Log File: {settings.log_file or 'console only'}")
    logger.info(f"  Logs Dir: {settings.logs_base_dir}")
    logger.info(f"  Chunk Size: {settings.chunk_size}")
    logger.info(f"  Tail Lines: default {settings.default_tail_lines}, max {settings.max_tail_lines}")

    logs.log_manager = LogManager(settings.logs_base_dir, settings.chunk_size)

    logger.info(f"✅ revline started, API docs at http://{settings.host}:{settings.port}/docs")

    yield

    logs.log_manager = None
    logger.info("✅ revline shut down")


# Create FastAPI application
app = FastAPI(
    title="revline",
    description="Tail and drain append-only log files from the newest line backward",
    version=__version__,
    lifespan=lifespan
)

# Include API routers
app.include_router(logs.router)


@app.get("/health")
async def health():
    """
    Simple health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "revline",
        "version": __version__
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "revline.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
