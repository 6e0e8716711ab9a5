# src/feature_vote/scripts/migrate.py
"""Apply Alembic migrations up to head for the configured database."""
from __future__ import annotations

import os
from typing import TextIO

from alembic import command
from alembic.config import Config

from feature_vote.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def alembic_config(url: str | None = None, output: TextIO | None = None) -> Config:
    """Build an Alembic config pointed at ``url`` or the configured database."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"), output_buffer=output)
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    return cfg


def run_upgrade_head(
    url: str | None = None, *, sql: bool = False, output: TextIO | None = None
) -> None:
    """Upgrade to head; with ``sql`` the DDL is printed instead of applied."""
    command.upgrade(alembic_config(url, output), "head", sql=sql)


if __name__ == "__main__":
    run_upgrade_head()
