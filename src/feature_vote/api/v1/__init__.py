# src/feature_vote/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import auth_router, features_router, votes_router

__all__ = [
    "auth_router",
    "features_router",
    "votes_router",
]
