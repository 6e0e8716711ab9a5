"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import LoginRequest, LoginResponse
from .common import ErrorDetail
from .feature import FeatureCreate, FeatureResponse
from .vote import VoteAck, VoteStatusResponse

__all__ = [
    "ErrorDetail",
    "FeatureCreate", "FeatureResponse",
    "LoginRequest", "LoginResponse",
    "VoteAck", "VoteStatusResponse",
]
