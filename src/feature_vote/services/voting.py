"""Voting service: maps an explicit principal and request onto ledger calls.

The service keeps no state between calls. Vote counts and has-voted flags are
always recomputed from the vote relation, and the caller's identity is passed
in as a ``Principal`` (or ``None``) instead of being read from request scope.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from feature_vote.models import Feature
from feature_vote.repositories.ledger import LedgerStore, RankedFeature
from feature_vote.services.errors import (
    FeatureNotFoundError,
    UnauthenticatedError,
    ValidationError,
)

__all__ = ["FeatureView", "Principal", "VotingService"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request after login."""

    id: int
    username: str


@dataclass(frozen=True)
class FeatureView:
    """Read-only projection of a feature with its derived vote data."""

    id: int
    title: str
    description: str
    created_at: datetime
    creator_username: str
    vote_count: int
    # None when the view was produced without a principal.
    has_voted: bool | None = None

    @classmethod
    def from_ranked(cls, ranked: RankedFeature) -> FeatureView:
        feature = ranked.feature
        return cls(
            id=feature.id,
            title=feature.title,
            description=feature.description,
            created_at=feature.created_at,
            creator_username=ranked.creator_username,
            vote_count=ranked.vote_count,
            has_voted=ranked.has_voted,
        )


def _require_principal(principal: Principal | None) -> Principal:
    if principal is None:
        raise UnauthenticatedError()
    return principal


class VotingService:
    """Stateless request handlers over a ``LedgerStore``."""

    def __init__(self, ledger: LedgerStore) -> None:
        self.ledger = ledger

    def login(self, username: str) -> Principal:
        """Resolve ``username`` to a principal. Accounts are never created here.

        Raises:
            ValidationError: If ``username`` is empty.
            UserNotFoundError: If no user has that exact username.
        """
        if not username:
            raise ValidationError("Username is required")
        user = self.ledger.find_user_by_username(username)
        logger.debug("User %s logged in", user.id)
        return Principal(id=user.id, username=user.username)

    def resolve_principal(self, user_id: int) -> Principal:
        """Rebuild a principal from a previously issued identifier.

        Raises:
            UnauthenticatedError: If the user no longer exists.
        """
        user = self.ledger.get_user(user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        return Principal(id=user.id, username=user.username)

    def list_features(
        self,
        principal: Principal | None = None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[FeatureView]:
        """Return the ranked view.

        Anonymous callers get ``has_voted=None``; with a principal each entry
        carries that caller's has-voted flag, read in the same query.
        """
        viewer_id = principal.id if principal is not None else None
        ranked = self.ledger.list_features_ranked(viewer_id, limit=limit, offset=offset)
        return [FeatureView.from_ranked(row) for row in ranked]

    def create_feature(
        self,
        principal: Principal | None,
        title: str,
        description: str | None = None,
    ) -> FeatureView:
        """Submit a feature request on behalf of ``principal``.

        Raises:
            UnauthenticatedError: If ``principal`` is ``None``.
            ValidationError: If ``title`` is empty or blank.
        """
        caller = _require_principal(principal)
        feature: Feature = self.ledger.insert_feature(
            (title or "").strip(),
            description,
            caller.id,
        )
        return FeatureView(
            id=feature.id,
            title=feature.title,
            description=feature.description,
            created_at=feature.created_at,
            creator_username=caller.username,
            vote_count=0,
            has_voted=False,
        )

    def cast_vote(self, principal: Principal | None, feature_id: int) -> None:
        """Move the (feature, caller) pair from not-voted to voted.

        Raises:
            UnauthenticatedError: If ``principal`` is ``None``.
            FeatureNotFoundError: If the feature does not exist.
            DuplicateVoteError: If the caller already voted; nothing changes.
        """
        caller = _require_principal(principal)
        vote = self.ledger.insert_vote(feature_id, caller.id)
        logger.info("Vote %s cast on feature %s by user %s", vote.id, feature_id, caller.id)

    def retract_vote(self, principal: Principal | None, feature_id: int) -> None:
        """Move the (feature, caller) pair from voted back to not-voted.

        Raises:
            UnauthenticatedError: If ``principal`` is ``None``.
            VoteNotFoundError: If the caller had no vote; nothing changes.
        """
        caller = _require_principal(principal)
        self.ledger.delete_vote(feature_id, caller.id)
        logger.info("Vote on feature %s retracted by user %s", feature_id, caller.id)

    def vote_status(self, principal: Principal | None, feature_id: int) -> bool:
        """Return whether the caller has voted on a feature, without writing.

        Raises:
            UnauthenticatedError: If ``principal`` is ``None``.
            FeatureNotFoundError: If the feature does not exist.
        """
        caller = _require_principal(principal)
        if self.ledger.get_feature(feature_id) is None:
            raise FeatureNotFoundError()
        return self.ledger.has_voted(feature_id, caller.id)
