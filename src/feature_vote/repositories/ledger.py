"""Data access for the vote ledger: users, features and votes."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import case, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from feature_vote.models import Feature, User, Vote
from feature_vote.models.vote import VOTE_UNIQUE_CONSTRAINT
from feature_vote.services.errors import (
    DuplicateVoteError,
    FeatureNotFoundError,
    StorageError,
    UserNotFoundError,
    ValidationError,
    VoteNotFoundError,
)

__all__ = ["LedgerStore", "RankedFeature"]

logger = logging.getLogger(__name__)


def _is_duplicate_vote(err: IntegrityError) -> bool:
    """Return True when ``err`` is the (feature, user) uniqueness violation."""
    diag = getattr(err.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is not None:
        return constraint == VOTE_UNIQUE_CONSTRAINT
    # SQLite reports the violated columns rather than the constraint name.
    return "UNIQUE constraint failed: vote.feature_id, vote.user_id" in str(err.orig)


@dataclass(frozen=True)
class RankedFeature:
    """One row of the ranked view, with counts derived at read time."""

    feature: Feature
    creator_username: str
    vote_count: int
    has_voted: bool | None = None


class LedgerStore:
    """Sole writer of users, features and votes.

    Each write method runs as its own transaction: it commits on success and
    rolls back on failure, so a rejected statement leaves no partial effect.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def _storage_error(self, action: str, err: SQLAlchemyError, *, mutating: bool) -> StorageError:
        self.session.rollback()
        logger.error("Ledger %s failed: %s", action, err, exc_info=True)
        return StorageError(f"Database error during {action}", mutating=mutating)

    def find_user_by_username(self, username: str) -> User:
        """Return the user with exactly ``username``.

        Raises:
            UserNotFoundError: If no row matches.
        """
        try:
            user = self.session.execute(
                select(User).where(User.username == username)
            ).scalar_one_or_none()
        except SQLAlchemyError as err:
            raise self._storage_error("user lookup", err, mutating=False) from err
        if user is None:
            raise UserNotFoundError()
        return user

    def get_user(self, user_id: int) -> User | None:
        """Return a user by identifier."""
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as err:
            raise self._storage_error("user lookup", err, mutating=False) from err

    def get_feature(self, feature_id: int) -> Feature | None:
        """Return a feature by identifier."""
        try:
            return self.session.get(Feature, feature_id)
        except SQLAlchemyError as err:
            raise self._storage_error("feature lookup", err, mutating=False) from err

    def insert_feature(self, title: str, description: str | None, creator_id: int) -> Feature:
        """Insert a new feature and return the persisted ORM instance.

        Args:
            title: Non-empty feature title.
            description: Optional free text; ``None`` is stored as ``""``.
            creator_id: Identifier of the submitting user.

        Raises:
            ValidationError: If ``title`` is empty. Nothing is written.
            StorageError: If the insert fails.
        """
        if not title or not title.strip():
            raise ValidationError("Title is required")

        feature = Feature(
            title=title,
            description=description or "",
            creator_id=creator_id,
        )
        self.session.add(feature)
        try:
            self.session.commit()
        except SQLAlchemyError as err:
            raise self._storage_error("feature insert", err, mutating=True) from err
        self.session.refresh(feature)
        logger.info("Feature %s created by user %s", feature.id, creator_id)
        return feature

    def list_features_ranked(
        self,
        viewer_id: int | None = None,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[RankedFeature]:
        """Return features ordered by vote count, newest first on ties.

        The final ``id`` key makes the order total, so repeated reads of an
        unchanged ledger page identically. When ``viewer_id`` is given each
        row also reports whether that user has a vote on the feature.
        """
        vote_count = func.count(Vote.id).label("vote_count")
        columns = [Feature, User.username, vote_count]
        if viewer_id is not None:
            columns.append(
                func.coalesce(
                    func.max(case((Vote.user_id == viewer_id, 1), else_=0)),
                    0,
                ).label("has_voted")
            )

        stmt = (
            select(*columns)
            .join(User, Feature.creator_id == User.id)
            .outerjoin(Vote, Vote.feature_id == Feature.id)
            .group_by(Feature.id, User.username)
            .order_by(vote_count.desc(), Feature.created_at.desc(), Feature.id.desc())
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as err:
            raise self._storage_error("ranked read", err, mutating=False) from err

        return [
            RankedFeature(
                feature=row[0],
                creator_username=row[1],
                vote_count=int(row[2]),
                has_voted=bool(row[3]) if viewer_id is not None else None,
            )
            for row in rows
        ]

    def insert_vote(self, feature_id: int, user_id: int) -> Vote:
        """Record a vote, relying on the unique constraint to reject duplicates.

        Raises:
            FeatureNotFoundError: If the feature does not exist.
            DuplicateVoteError: If the user already has a vote on the feature.
            StorageError: For any other database failure.
        """
        if self.get_feature(feature_id) is None:
            raise FeatureNotFoundError()

        vote = Vote(feature_id=feature_id, user_id=user_id)
        self.session.add(vote)
        try:
            self.session.commit()
        except IntegrityError as err:
            if not _is_duplicate_vote(err):
                raise self._storage_error("vote insert", err, mutating=True) from err
            self.session.rollback()
            logger.info("Duplicate vote rejected for feature %s by user %s", feature_id, user_id)
            raise DuplicateVoteError() from err
        except SQLAlchemyError as err:
            raise self._storage_error("vote insert", err, mutating=True) from err
        self.session.refresh(vote)
        return vote

    def delete_vote(self, feature_id: int, user_id: int) -> None:
        """Remove the user's vote on a feature.

        Raises:
            VoteNotFoundError: If no vote matched; the vote set is unchanged.
        """
        try:
            result = self.session.execute(
                delete(Vote).where(Vote.feature_id == feature_id, Vote.user_id == user_id)
            )
            self.session.commit()
        except SQLAlchemyError as err:
            raise self._storage_error("vote delete", err, mutating=True) from err

        if result.rowcount == 0:
            logger.debug("No vote to delete for feature %s by user %s", feature_id, user_id)
            raise VoteNotFoundError()

    def has_voted(self, feature_id: int, user_id: int) -> bool:
        """Return whether a vote row exists for the pair, without writing."""
        try:
            found = self.session.execute(
                select(Vote.id).where(Vote.feature_id == feature_id, Vote.user_id == user_id)
            ).first()
        except SQLAlchemyError as err:
            raise self._storage_error("vote lookup", err, mutating=False) from err
        return found is not None

    def count_votes(self, feature_id: int | None = None) -> int:
        """Return the number of vote rows, optionally for a single feature."""
        stmt = select(func.count(Vote.id))
        if feature_id is not None:
            stmt = stmt.where(Vote.feature_id == feature_id)
        try:
            return int(self.session.execute(stmt).scalar_one())
        except SQLAlchemyError as err:
            raise self._storage_error("vote count", err, mutating=False) from err

    def count_features(self) -> int:
        """Return the number of feature rows."""
        try:
            return int(self.session.execute(select(func.count(Feature.id))).scalar_one())
        except SQLAlchemyError as err:
            raise self._storage_error("feature count", err, mutating=False) from err
