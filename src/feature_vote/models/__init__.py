# src/feature_vote/models/__init__.py
"""SQLAlchemy models for the Feature Vote ledger."""

from .feature import Feature
from .user import User
from .vote import Vote

__all__ = [
    "Feature",
    "User",
    "Vote",
]
