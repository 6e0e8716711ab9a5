"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteAck(BaseModel):
    """Acknowledgement returned when a vote is cast or retracted."""

    message: str


class VoteStatusResponse(BaseModel):
    """Side-effect-free answer to "has the caller voted on this feature?"."""

    feature_id: int
    has_voted: bool = Field(..., description="True while the caller's vote row exists")
