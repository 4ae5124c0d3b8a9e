# ruff: noqa: I001
"""Read access to the user's bookkeeping data.

The orchestrator depends only on the :class:`BookkeepingReader` protocol.
:class:`SqlBookkeepingReader` implements it over the shared ``ledger_db``
models; callers own the session and its transaction scope. Records are
returned in display order and exclude soft-deleted rows; visibility and
category-tree filtering happen later, when lookup tables are built.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_db.models.bookkeeping import Account, TransactionCategory, TransactionTag, User
from .models import AccountRecord, CategoryRecord, CategoryType, TagRecord, UserRecord


class BookkeepingReader(Protocol):
    def get_user(self, uid: int) -> UserRecord | None: ...

    def get_all_accounts(self, uid: int) -> Sequence[AccountRecord]: ...

    def get_all_categories(self, uid: int) -> Sequence[CategoryRecord]: ...

    def get_all_tags(self, uid: int) -> Sequence[TagRecord]: ...


class SqlBookkeepingReader:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_user(self, uid: int) -> UserRecord | None:
        row = self.session.execute(
            select(User).where(User.uid == uid, User.deleted.is_(False))
        ).scalar_one_or_none()
        if row is None:
            return None
        return UserRecord(uid=row.uid, feature_restriction=int(row.feature_restriction or 0))

    def get_all_accounts(self, uid: int) -> list[AccountRecord]:
        rows = self.session.scalars(
            select(Account)
            .where(Account.uid == uid, Account.deleted.is_(False))
            .order_by(Account.display_order, Account.account_id)
        )
        return [AccountRecord(account_id=r.account_id, name=r.name, hidden=r.hidden) for r in rows]

    def get_all_categories(self, uid: int) -> list[CategoryRecord]:
        rows = self.session.scalars(
            select(TransactionCategory)
            .where(TransactionCategory.uid == uid, TransactionCategory.deleted.is_(False))
            .order_by(
                TransactionCategory.type,
                TransactionCategory.parent_category_id,
                TransactionCategory.display_order,
                TransactionCategory.category_id,
            )
        )
        return [
            CategoryRecord(
                category_id=r.category_id,
                name=r.name,
                type=CategoryType(r.type),
                parent_category_id=r.parent_category_id,
                hidden=r.hidden,
            )
            for r in rows
        ]

    def get_all_tags(self, uid: int) -> list[TagRecord]:
        rows = self.session.scalars(
            select(TransactionTag)
            .where(TransactionTag.uid == uid, TransactionTag.deleted.is_(False))
            .order_by(TransactionTag.display_order, TransactionTag.tag_id)
        )
        return [TagRecord(tag_id=r.tag_id, name=r.name, hidden=r.hidden) for r in rows]


__all__ = ["BookkeepingReader", "SqlBookkeepingReader"]
