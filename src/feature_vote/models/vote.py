# src/feature_vote/models/vote.py
"""Model capturing one user's vote on a feature."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from feature_vote.db.session import Base
from feature_vote.db.time import utcnow

VOTE_UNIQUE_CONSTRAINT = "uq_vote_feature_user"


class Vote(Base):
    """A cast ballot.

    Votes are inserted and deleted but never updated. The composite unique
    constraint is the only guard against double voting; callers rely on the
    database rejecting the second insert rather than checking first.
    """

    __tablename__ = "vote"
    __table_args__ = (
        UniqueConstraint("feature_id", "user_id", name=VOTE_UNIQUE_CONSTRAINT),
        Index("ix_vote_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    feature_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("feature.id"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
