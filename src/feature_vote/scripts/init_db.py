"""Create the ledger tables and seed the default accounts."""
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from feature_vote.core.settings import settings
from feature_vote.db.session import create_tables, drop_tables, engine_options
from feature_vote.models import User


def seed_users(session: Session, usernames: Iterable[str], email_domain: str) -> list[str]:
    """Insert any missing users and return the names that were created.

    Existing usernames are left untouched, so running the seed twice is a no-op.
    """
    created: list[str] = []
    for username in usernames:
        username = username.strip()
        if not username:
            continue
        exists = session.execute(
            select(User.id).where(User.username == username)
        ).first()
        if exists is not None:
            continue
        session.add(User(username=username, email=f"{username}@{email_domain}"))
        created.append(username)
    session.commit()
    return created


def init_db(bind: Engine, *, drop: bool = False, seed: bool = True) -> list[str]:
    """Create tables on ``bind`` and optionally seed the configured users."""
    if drop:
        drop_tables(bind)
    create_tables(bind)
    if not seed:
        return []
    with Session(bind) as session:
        return seed_users(session, settings.seed_users, settings.seed_email_domain)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create and seed the Feature Vote database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all ledger tables before recreating them.",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Create tables without inserting the default users.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args()

    url = args.url or settings.effective_database_url
    try:
        bind = create_engine(url, **engine_options(url))
        created = init_db(bind, drop=args.drop_tables, seed=not args.no_seed)
    except SQLAlchemyError as exc:
        print(f"[init_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    if created:
        print(f"[init_db] seeded users: {', '.join(created)}")
    print("[init_db] database initialized")


if __name__ == "__main__":
    main()
