"""ledger_db: shared bookkeeping database library (SQLAlchemy/Alembic).

Public exports
--------------
- ``Base`` and ``metadata`` for Alembic autogenerate/targeting
- ORM models in ``ledger_db.models.bookkeeping`` (re-exported for convenience)
- Engine/session helpers in ``ledger_db.client`` (``session_scope``, ``read_scope``)
"""

from __future__ import annotations

from .models.bookkeeping import (
    Account,
    Base,
    TransactionCategory,
    TransactionTag,
    User,
)

# Re-export SQLAlchemy metadata for Alembic's env.py
metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "Account",
    "TransactionCategory",
    "TransactionTag",
    "User",
]
