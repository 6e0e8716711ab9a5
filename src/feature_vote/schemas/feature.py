"""Feature-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FeatureCreate(BaseModel):
    """Schema for submitting a new feature request."""

    # Title checks live in the service so failures are reported as
    # validation-error rather than a schema error.
    title: str = Field("", description="Short feature title")
    description: str | None = Field(None, description="Optional details")


class FeatureResponse(BaseModel):
    """Schema for a feature in the ranked view."""

    id: int
    title: str
    description: str
    created_at: datetime
    creator: str = Field(..., description="Username of the submitting user")
    vote_count: int
    has_voted: bool | None = Field(
        None,
        description="Whether the caller has voted; null for anonymous requests",
    )

    model_config = ConfigDict(from_attributes=True)
