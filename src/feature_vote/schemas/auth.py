"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = Field("", description="Existing account name (case-sensitive)")


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    user_id: int = Field(..., description="Identifier of the authenticated user")
    username: str
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
