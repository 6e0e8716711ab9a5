# src/feature_vote/models/user.py
"""SQLAlchemy model for registered voters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from feature_vote.db.session import Base
from feature_vote.db.time import utcnow


class User(Base):
    """Identity record provisioned outside the ledger and never mutated by it."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Case-sensitive; "Alice" and "alice" are distinct accounts.
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
