"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of the ``detail`` field on every failed request."""

    code: str = Field(..., description="Stable machine-readable failure kind.")
    message: str = Field(..., description="Human-readable explanation.")
