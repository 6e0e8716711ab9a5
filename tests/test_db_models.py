"""Unit tests for the ORM models in feature_vote.models.

These tests verify mapping details the ledger relies on: table names, the
composite uniqueness constraint on votes, and the foreign keys that tie votes
and features back to users.
"""

import pytest
from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError

from feature_vote.models import Feature, User, Vote
from feature_vote.models.vote import VOTE_UNIQUE_CONSTRAINT


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert User.__tablename__ == "user_account"
    assert Feature.__tablename__ == "feature"
    assert Vote.__tablename__ == "vote"


def test_vote_unique_constraint_covers_feature_and_user():
    """Votes carry a composite unique constraint on (feature_id, user_id)."""
    constraints = [
        c for c in Vote.__table__.constraints
        if isinstance(c, UniqueConstraint) and c.name == VOTE_UNIQUE_CONSTRAINT
    ]
    assert len(constraints) == 1
    assert {col.name for col in constraints[0].columns} == {"feature_id", "user_id"}


def test_user_columns_are_unique():
    table = User.__table__
    assert table.c.username.unique is True
    assert table.c.email.unique is True


def test_foreign_keys():
    assert {fk.target_fullname for fk in Vote.__table__.foreign_keys} == {
        "feature.id",
        "user_account.id",
    }
    assert {fk.target_fullname for fk in Feature.__table__.foreign_keys} == {"user_account.id"}


def test_duplicate_vote_rejected_by_database(db_session, feature, bob):
    db_session.add(Vote(feature_id=feature.id, user_id=bob.id))
    db_session.commit()

    db_session.add(Vote(feature_id=feature.id, user_id=bob.id))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_vote_for_missing_feature_rejected_by_database(db_session, bob):
    db_session.add(Vote(feature_id=9999, user_id=bob.id))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
