# ruff: noqa: I001
"""
Alembic environment for the ``ledger_db`` bookkeeping schema.

``LEDGER_DATABASE_URL`` wins over ``sqlalchemy.url`` in alembic.ini; a
``.env`` found from the working directory upwards is loaded first without
overriding variables that are already set.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from dotenv import find_dotenv, load_dotenv
from sqlalchemy import engine_from_config, pool

import ledger_db
from ledger_db.client import DATABASE_URL_ENV, resolve_database_url

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

load_dotenv(find_dotenv(usecwd=True), override=False)

target_metadata = ledger_db.metadata


def _url() -> str:
    try:
        return resolve_database_url()
    except RuntimeError:
        url = config.get_main_option("sqlalchemy.url")
        if not url:
            raise RuntimeError(
                f"{DATABASE_URL_ENV} is not set and alembic.ini has no sqlalchemy.url"
            ) from None
        return url


def run_migrations_offline() -> None:
    context.configure(
        url=_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = dict(config.get_section(config.config_ini_section) or {})
    section["sqlalchemy.url"] = _url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
