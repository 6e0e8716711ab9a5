# src/feature_vote/api/v1/endpoints/auth.py
"""Authentication endpoints for the Feature Vote API."""

from __future__ import annotations

from fastapi import APIRouter

from feature_vote.api.v1.dependencies import VotingServiceDep, http_error
from feature_vote.core.security import create_access_token
from feature_vote.schemas.auth import LoginRequest, LoginResponse
from feature_vote.services.errors import VotingError

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, service: VotingServiceDep) -> LoginResponse:
    """Exchange an existing username for a bearer token.

    Unknown usernames are reported as ``user-not-found``; no account is created.
    """
    try:
        principal = service.login(payload.username)
    except VotingError as err:
        raise http_error(err) from err

    return LoginResponse(
        user_id=principal.id,
        username=principal.username,
        access_token=create_access_token(principal.id),
        token_type="bearer",
    )
