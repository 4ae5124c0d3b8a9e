"""Engine and session helpers for the bookkeeping database.

One engine is bound per process, lazily, to ``LEDGER_DATABASE_URL`` (or an
explicit URL passed by the caller). Two scopes are offered:

- :func:`session_scope` commits on success and rolls back on error;
- :func:`read_scope` always rolls back, for callers such as bill
  recognition that only read the user's accounts, categories and tags.

Usage
-----
from ledger_db.client import read_scope

with read_scope() as s:
    s.scalars(select(Account))
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

DATABASE_URL_ENV = "LEDGER_DATABASE_URL"


@dataclass(frozen=True, slots=True)
class _Binding:
    url: str
    engine: Engine
    sessions: sessionmaker[Session]


_BINDING: _Binding | None = None


def resolve_database_url(override: str | None = None) -> str:
    url = override or os.getenv(DATABASE_URL_ENV)
    if not url:
        raise RuntimeError(f"{DATABASE_URL_ENV} is not set; cannot open the bookkeeping database")
    return url


def _binding(database_url: str | None) -> _Binding:
    global _BINDING
    url = resolve_database_url(database_url)
    if _BINDING is None:
        engine = create_engine(url, pool_pre_ping=True)
        _BINDING = _Binding(
            url=url,
            engine=engine,
            sessions=sessionmaker(bind=engine, expire_on_commit=False, class_=Session),
        )
    elif _BINDING.url != url:
        # One database per process; tests call reset_engine() between files.
        raise RuntimeError(
            f"bookkeeping engine is bound to a different {DATABASE_URL_ENV}; "
            "call reset_engine() before switching databases"
        )
    return _BINDING


def get_engine(*, database_url: str | None = None) -> Engine:
    """Return the shared engine, creating it on first use."""

    return _binding(database_url).engine


def reset_engine() -> None:
    """Dispose the shared engine so the next call may bind another URL."""

    global _BINDING
    if _BINDING is not None:
        _BINDING.engine.dispose()
    _BINDING = None


def get_session(*, database_url: str | None = None) -> Session:
    return _binding(database_url).sessions()


@contextmanager
def session_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = get_session(database_url=database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def read_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Session for reads only; nothing done inside is ever committed."""

    session = get_session(database_url=database_url)
    try:
        yield session
    finally:
        session.rollback()
        session.close()


__all__ = [
    "DATABASE_URL_ENV",
    "get_engine",
    "get_session",
    "read_scope",
    "reset_engine",
    "resolve_database_url",
    "session_scope",
]
