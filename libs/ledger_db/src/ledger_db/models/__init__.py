"""Shared SQLAlchemy models registry for the bookkeeping database.

Currently includes the per-user reference data read by ``bill_recognition``.
"""

from .bookkeeping import Account, Base, TransactionCategory, TransactionTag, User

__all__ = [
    "Base",
    "Account",
    "TransactionCategory",
    "TransactionTag",
    "User",
]
