# src/feature_vote/main.py
"""Main entry point for the Feature Vote application."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from feature_vote.api.v1 import auth_router, features_router, votes_router
from feature_vote.core.settings import settings

# Initialize FastAPI app
app = FastAPI(
    title="Feature Vote API",
    description="Feature requests ranked by one vote per user",
    version=settings.app_version,
)

# Add CORS middleware for the web and mobile clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(features_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Feature requests ranked by one vote per user",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("feature_vote.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
