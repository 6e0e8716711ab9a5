# src/feature_vote/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Feature Vote API."""

from fastapi import APIRouter, status

from feature_vote.api.v1.dependencies import PrincipalDep, VotingServiceDep, http_error
from feature_vote.schemas.vote import VoteAck, VoteStatusResponse
from feature_vote.services.errors import VotingError

router = APIRouter(prefix="/features", tags=["votes"])


@router.get("/{feature_id}/vote", response_model=VoteStatusResponse)
def get_my_vote(
    feature_id: int,
    service: VotingServiceDep,
    principal: PrincipalDep,
) -> VoteStatusResponse:
    """Report whether the caller has voted on a feature without changing anything."""
    try:
        has_voted = service.vote_status(principal, feature_id)
    except VotingError as err:
        raise http_error(err) from err
    return VoteStatusResponse(feature_id=feature_id, has_voted=has_voted)


@router.post("/{feature_id}/vote", response_model=VoteAck, status_code=status.HTTP_201_CREATED)
def cast_vote(
    feature_id: int,
    service: VotingServiceDep,
    principal: PrincipalDep,
) -> VoteAck:
    """Cast the caller's vote; a second cast is rejected with 409."""
    try:
        service.cast_vote(principal, feature_id)
    except VotingError as err:
        raise http_error(err) from err
    return VoteAck(message="Vote added successfully")


@router.delete("/{feature_id}/vote", response_model=VoteAck)
def retract_vote(
    feature_id: int,
    service: VotingServiceDep,
    principal: PrincipalDep,
) -> VoteAck:
    """Retract the caller's vote; retracting without a vote is rejected with 404."""
    try:
        service.retract_vote(principal, feature_id)
    except VotingError as err:
        raise http_error(err) from err
    return VoteAck(message="Vote removed successfully")
