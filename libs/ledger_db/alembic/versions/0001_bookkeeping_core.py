# ruff: noqa: I001
"""Bookkeeping reference tables: users, accounts, categories, tags.

Revision ID: 0001_bookkeeping_core
Revises: None
Create Date: 2026-02-08
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_bookkeeping_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _flag(name: str) -> sa.Column:
    return sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.text("false"))


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uid", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("username", sa.String(32), nullable=False, unique=True),
        sa.Column("feature_restriction", sa.BigInteger(), nullable=False, server_default="0"),
        _flag("deleted"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    op.create_table(
        "accounts",
        sa.Column("account_id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("uid", sa.BigInteger(), sa.ForeignKey("users.uid"), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("parent_account_id", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _flag("hidden"),
        _flag("deleted"),
    )
    op.create_index(
        "ix_accounts_uid_deleted_order", "accounts", ["uid", "deleted", "display_order"]
    )

    op.create_table(
        "transaction_categories",
        sa.Column("category_id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("uid", sa.BigInteger(), sa.ForeignKey("users.uid"), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("parent_category_id", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _flag("hidden"),
        _flag("deleted"),
        sa.CheckConstraint("type in (1, 2, 3)", name="ck_transaction_categories_type"),
    )
    op.create_index(
        "ix_transaction_categories_uid_deleted_type",
        "transaction_categories",
        ["uid", "deleted", "type", "parent_category_id", "display_order"],
    )

    op.create_table(
        "transaction_tags",
        sa.Column("tag_id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("uid", sa.BigInteger(), sa.ForeignKey("users.uid"), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _flag("hidden"),
        _flag("deleted"),
    )
    op.create_index(
        "ix_transaction_tags_uid_deleted_order",
        "transaction_tags",
        ["uid", "deleted", "display_order"],
    )


def downgrade() -> None:
    op.drop_index("ix_transaction_tags_uid_deleted_order", table_name="transaction_tags")
    op.drop_table("transaction_tags")
    op.drop_index(
        "ix_transaction_categories_uid_deleted_type", table_name="transaction_categories"
    )
    op.drop_table("transaction_categories")
    op.drop_index("ix_accounts_uid_deleted_order", table_name="accounts")
    op.drop_table("accounts")
    op.drop_table("users")
