# src/feature_vote/api/v1/endpoints/features.py
"""Feature submission and ranked listing endpoints."""

from fastapi import APIRouter, Query, status

from feature_vote.api.v1.dependencies import PrincipalDep, VotingServiceDep, http_error
from feature_vote.schemas.feature import FeatureCreate, FeatureResponse
from feature_vote.services.errors import VotingError
from feature_vote.services.voting import FeatureView

router = APIRouter(prefix="/features", tags=["features"])


def to_feature_response(view: FeatureView) -> FeatureResponse:
    """Convert a service view to the API schema."""
    return FeatureResponse(
        id=view.id,
        title=view.title,
        description=view.description,
        created_at=view.created_at,
        creator=view.creator_username,
        vote_count=view.vote_count,
        has_voted=view.has_voted,
    )


@router.get("", response_model=list[FeatureResponse])
def list_features(
    service: VotingServiceDep,
    principal: PrincipalDep,
    limit: int | None = Query(None, ge=1, le=500, description="Maximum number of features"),
    offset: int = Query(0, ge=0, description="Number of ranked entries to skip"),
) -> list[FeatureResponse]:
    """List features by vote count, newest first on ties.

    Authenticated callers also get ``has_voted`` for each entry.
    """
    try:
        views = service.list_features(principal, limit=limit, offset=offset)
    except VotingError as err:
        raise http_error(err) from err
    return [to_feature_response(view) for view in views]


@router.post("", response_model=FeatureResponse, status_code=status.HTTP_201_CREATED)
def create_feature(
    payload: FeatureCreate,
    service: VotingServiceDep,
    principal: PrincipalDep,
) -> FeatureResponse:
    """Submit a new feature request as the authenticated user."""
    try:
        view = service.create_feature(principal, payload.title, payload.description)
    except VotingError as err:
        raise http_error(err) from err
    return to_feature_response(view)
