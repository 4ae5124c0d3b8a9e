from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# users
# ---------------------------


class User(Base):
    __tablename__ = "users"

    uid: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    username: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    # Bitmask of restricted features (see bill_recognition.models.FeatureRestriction).
    feature_restriction: Mapped[int] = mapped_column(
        BigInteger, nullable=False, server_default=text("0")
    )
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("now()")
    )


# ---------------------------
# accounts
# ---------------------------


class Account(Base):
    __tablename__ = "accounts"

    account_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    uid: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.uid"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    # 0 for top-level accounts; sub-accounts point at their parent.
    parent_account_id: Mapped[int] = mapped_column(
        BigInteger, nullable=False, server_default=text("0")
    )
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))

    __table_args__ = (Index("ix_accounts_uid_deleted_order", "uid", "deleted", "display_order"),)


# ---------------------------
# transaction_categories
# ---------------------------


class TransactionCategory(Base):
    __tablename__ = "transaction_categories"

    category_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    uid: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.uid"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    # 1 = income, 2 = expense, 3 = transfer
    type: Mapped[int] = mapped_column(Integer, nullable=False)
    # 0 marks a level-one category (the root of a two-level tree). Secondary
    # categories reference their level-one parent.
    parent_category_id: Mapped[int] = mapped_column(
        BigInteger, nullable=False, server_default=text("0")
    )
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))

    __table_args__ = (
        CheckConstraint("type in (1, 2, 3)", name="ck_transaction_categories_type"),
        Index(
            "ix_transaction_categories_uid_deleted_type",
            "uid",
            "deleted",
            "type",
            "parent_category_id",
            "display_order",
        ),
    )


# ---------------------------
# transaction_tags
# ---------------------------


class TransactionTag(Base):
    __tablename__ = "transaction_tags"

    tag_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    uid: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.uid"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))

    __table_args__ = (
        Index("ix_transaction_tags_uid_deleted_order", "uid", "deleted", "display_order"),
    )


__all__ = [
    "Base",
    "User",
    "Account",
    "TransactionCategory",
    "TransactionTag",
]
