"""Alembic environment for the DevFlow schema (users, projects)."""

import os

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from devflow.core.config import get_settings
from devflow.models import Base

# Importing the models registers users and projects on Base.metadata.
from devflow.models import Project, User  # noqa: F401

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for DATABASE_URL without connecting."""
    _configure(
        url=get_settings().DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(get_settings().DATABASE_URL, poolclass=NullPool)
    with connectable.connect() as connection:
        # SQLite cannot ALTER constraints in place; batch mode recreates tables.
        _configure(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
