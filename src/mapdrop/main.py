# src/mapdrop/main.py
"""Main entry point for the MapDrop application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from mapdrop import __version__
from mapdrop.api.v1 import follows_router, map_router, messages_router, users_router
from mapdrop.core.logging import configure_logging
from mapdrop.core.settings import settings

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="MapDrop API",
    description="Drop messages on the map, read them, unlock the people behind them",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers; users before follows so /users/me/* wins over /users/{id}/*
app.include_router(messages_router, prefix="/api/v1")
app.include_router(map_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(follows_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    logger.info(
        "%s started (timezone=%s, daily_limit=%d, unlock_threshold=%d, top=%d)",
        settings.app_name,
        settings.timezone,
        settings.daily_message_limit,
        settings.profile_unlock_threshold,
        settings.top_messages_limit,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "MapDrop API",
        "version": __version__,
        "description": "Geotagged messages with read tracking and social unlocks",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mapdrop.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
