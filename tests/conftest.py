# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from feature_vote.core.security import create_access_token
from feature_vote.db.session import Base
from feature_vote.db.session import get_db as app_get_session
from feature_vote.main import app as fastapi_app
from feature_vote.models import Feature, User, Vote
from feature_vote.repositories.ledger import LedgerStore
from feature_vote.services.voting import Principal, VotingService

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def ledger(db_session: Session) -> LedgerStore:
    return LedgerStore(db_session)


@pytest.fixture()
def voting_service(ledger: LedgerStore) -> VotingService:
    return VotingService(ledger)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[[str], User]:
    """Return a factory that persists a user with a derived email."""

    def _make_user(username: str) -> User:
        user = User(username=username, email=f"{username}@example.com")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[[str], User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[[str], User]) -> User:
    return make_user("bob")


@pytest.fixture()
def alice_principal(alice: User) -> Principal:
    return Principal(id=alice.id, username=alice.username)


@pytest.fixture()
def bob_principal(bob: User) -> Principal:
    return Principal(id=bob.id, username=bob.username)


@pytest.fixture()
def make_feature(db_session: Session) -> Callable[..., Feature]:
    """Return a factory that inserts a feature, optionally with a fixed timestamp."""

    def _make_feature(
        creator: User,
        title: str = "Feature",
        *,
        created_at: datetime | None = None,
        description: str = "",
    ) -> Feature:
        feature = Feature(title=title, description=description, creator_id=creator.id)
        if created_at is not None:
            feature.created_at = created_at
        db_session.add(feature)
        db_session.commit()
        db_session.refresh(feature)
        return feature

    return _make_feature


@pytest.fixture()
def add_votes(db_session: Session) -> Callable[[Feature, list[User]], None]:
    """Return a helper that records one vote per given user on a feature."""

    def _add_votes(feature: Feature, voters: list[User]) -> None:
        for voter in voters:
            db_session.add(Vote(feature_id=feature.id, user_id=voter.id))
        db_session.commit()

    return _add_votes


@pytest.fixture()
def feature(make_feature: Callable[..., Feature], alice: User) -> Feature:
    """A baseline feature submitted by alice."""
    return make_feature(alice, "Dark mode", description="Easier on the eyes")


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
