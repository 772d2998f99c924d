"""Alembic migration environment for Morning Dashboard."""

from __future__ import annotations

import logging
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

from morning_dashboard import models as _models  # noqa: F401

config = context.config
target_metadata = SQLModel.metadata

# 日本語: CLI 実行時のみ alembic.ini のロガー設定を適用 / English: Apply alembic.ini logging only when run from the CLI
if config.config_file_name is not None and not logging.getLogger().handlers:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _configured_url() -> str:
    # 日本語: `alembic upgrade head` 直接実行時は DATABASE_URL を優先 / English: DATABASE_URL wins when alembic is run directly
    database_url = os.getenv("DATABASE_URL") if config.cmd_opts is not None else None
    database_url = database_url or config.get_main_option("sqlalchemy.url")
    if not database_url:
        raise ValueError("sqlalchemy.url must be configured for Alembic migrations.")
    return database_url


def run_migrations_offline() -> None:
    """Emit SQL for the dashboard schema without a live connection."""
    context.configure(
        url=_configured_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _configured_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
