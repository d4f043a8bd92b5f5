# pyright: reportMissingTypeStubs=false
"""
Vault Backend API

A FastAPI application exposing maintenance endpoints for the password
manager database.

Features:
- On-demand database cleanup (dry run or fix mode)
- Optional nightly cleanup in fix mode
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from api import system
from core.config import CLEANUP_SCHEDULER_ENABLED
from services.cleanup_scheduler import start_cleanup_scheduler, stop_cleanup_scheduler
from services.cleanup_service import get_cleanup_locator, get_cleanup_registry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting Vault Backend API")

    # Built once here; plugins extend it through register_cleanups()
    get_cleanup_locator()
    logger.info(f"Cleanup registry ready: {get_cleanup_registry()!r}")

    if CLEANUP_SCHEDULER_ENABLED:
        try:
            await start_cleanup_scheduler()
        except Exception as e:
            logger.exception(f"Failed to start cleanup scheduler: {e}")

    yield

    if CLEANUP_SCHEDULER_ENABLED:
        try:
            await stop_cleanup_scheduler()
        except Exception as e:
            logger.exception(f"Error stopping cleanup scheduler: {e}")

    logger.info("Shutting down Vault Backend API")


app = FastAPI(
    title="Vault Backend",
    description="Password manager backend maintenance API",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(
    system.router,
    prefix="/api/system",
    tags=["system"],
    responses={
        401: {"description": "Unauthorized"},
        500: {"description": "Internal server error"},
        503: {"description": "Maintenance API disabled"},
    },
)


@app.get(
    "/health",
    summary="Health check",
    description="Returns the health status of the API",
)
async def health_check() -> dict[str, str]:
    """Check if the API is healthy and responding."""
    return {"status": "healthy"}
