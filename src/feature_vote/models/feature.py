# src/feature_vote/models/feature.py
"""SQLAlchemy model for submitted feature requests."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from feature_vote.db.session import Base
from feature_vote.db.time import utcnow


class Feature(Base):
    """A feature request.

    Rows are append-only: there is no edit or delete path, so ``created_at``
    and ``creator_id`` are fixed for the lifetime of the row.
    """

    __tablename__ = "feature"
    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_feature_title_not_empty"),
        Index("ix_feature_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
