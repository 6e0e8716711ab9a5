"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from feature_vote.core.security import InvalidTokenError, decode_access_token
from feature_vote.db.session import get_db
from feature_vote.repositories.ledger import LedgerStore
from feature_vote.schemas.common import ErrorDetail
from feature_vote.services.errors import UnauthenticatedError, VotingError
from feature_vote.services.voting import Principal, VotingService

# Bearer tokens are optional at the transport level; operations that need a
# principal reject ``None`` themselves.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def http_error(err: VotingError) -> HTTPException:
    """Translate a service failure into an HTTP error carrying its kind.

    Args:
        err: The typed failure raised by the ledger or service.

    Returns:
        An ``HTTPException`` whose detail is ``{"code", "message"}``.
    """
    headers = None
    if err.http_status == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=err.http_status,
        detail=ErrorDetail(code=err.code, message=err.message).model_dump(),
        headers=headers,
    )


def get_voting_service(db: SessionDep) -> VotingService:
    """Build a voting service bound to the request's session."""
    return VotingService(LedgerStore(db))


VotingServiceDep = Annotated[VotingService, Depends(get_voting_service)]


def get_optional_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    service: VotingServiceDep,
) -> Principal | None:
    """Resolve the bearer token, if any, into an explicit principal.

    Args:
        credentials: HTTP Bearer token credentials, absent for anonymous calls
        service: Voting service used to confirm the user still exists

    Returns:
        The caller's principal, or ``None`` when no token was sent

    Raises:
        HTTPException: If a token was sent but is invalid or names no user
    """
    if credentials is None:
        return None
    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        raise http_error(UnauthenticatedError(str(err))) from err
    try:
        return service.resolve_principal(user_id)
    except VotingError as err:
        raise http_error(err) from err


# Type alias for the optional principal dependency
PrincipalDep = Annotated[Principal | None, Depends(get_optional_principal)]
