"""Alembic environment for the Feature Vote ledger schema.

The database URL comes from ``ALEMBIC_URL``, then ``sqlalchemy.url`` as set by
``feature_vote.scripts.migrate``, then the application settings. Online runs
open the engine with the same connect options the service uses, so SQLite
migrations get foreign keys and the configured busy timeout.
"""
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from feature_vote.core.settings import settings
from feature_vote.db.session import Base, engine_options

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def database_url() -> str:
    """Return the URL migrations should run against."""
    return (
        os.getenv("ALEMBIC_URL")
        or config.get_main_option("sqlalchemy.url")
        or settings.database_url_sync
    )


def include_object(obj, name, type_, reflected, compare_to):
    """Exclude Alembic's own bookkeeping table from autogenerate output."""
    return not (type_ == "table" and name == "alembic_version")


def run_migrations_offline(url: str) -> None:
    """Emit the migration SQL for ``url`` without connecting."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
        # SQLite cannot ALTER constraints in place.
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    """Apply migrations over a live connection to ``url``."""
    options = engine_options(url)
    options.pop("pool_pre_ping", None)
    connectable = create_engine(url, poolclass=pool.NullPool, **options)

    try:
        with connectable.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                include_object=include_object,
                render_as_batch=connection.dialect.name == "sqlite",
            )

            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline(database_url())
else:
    run_migrations_online(database_url())
