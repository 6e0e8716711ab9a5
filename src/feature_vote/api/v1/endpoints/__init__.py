# src/feature_vote/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .features import router as features_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "features_router",
    "votes_router",
]
