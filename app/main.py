"""
FastAPI application for bundler-cleanup.

Exposes the health, liveness and manual trigger endpoints. The scheduled
trigger runs in the Celery beat/worker processes (see app.workers).

Usage:
    uvicorn app.main:app --port 8081
"""

from fastapi import FastAPI

from app.cleanup.routes import router as cleanup_router
from bundler_core.config import settings
from bundler_core.logging import setup_logging

# Initialize logging
setup_logging()

app = FastAPI(
    title="Bundler Cleanup",
    description="Retention sweeper for the bundler staging area and job datasource",
    version="1.0.0",
)

# Cleanup routes keep the historical root paths (/isAlive, /startCleanup)
app.include_router(cleanup_router, tags=["Cleanup"])


@app.get("/health")
def health():
    """
    Health check endpoint.

    Returns:
        dict: Status and service information.
    """
    return {"status": "ok", "service": settings.SERVICE_NAME, "version": "1.0.0"}
