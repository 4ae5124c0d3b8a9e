"""Name -> id lookup tables built once per batch from the user's data.

Tables are plain read-only mappings keyed by display name:

- accounts: visible accounts only;
- categories: one table per transaction type (expense/income/transfer),
  excluding hidden categories and level-one categories (those whose parent is
  the tree-root sentinel), so only secondary categories resolve;
- tags: visible tags only.

When two records share a name the later one (in the collaborator's display
order) replaces the earlier. Resolution never fails: unknown names resolve
to ``None`` (or are dropped, for tags).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .models import (
    LEVEL_ONE_CATEGORY_PARENT_ID,
    AccountRecord,
    CategoryRecord,
    CategoryType,
    TagRecord,
    TransactionType,
)

_EMPTY: Mapping = MappingProxyType({})


def _index_by_name[R](records: Iterable[R], name_of) -> Mapping[str, R]:
    out: dict[str, R] = {}
    for r in records:
        out[name_of(r)] = r
    return MappingProxyType(out)


@dataclass(frozen=True, slots=True)
class LookupTables:
    accounts: Mapping[str, AccountRecord] = field(default_factory=lambda: _EMPTY)
    expense_categories: Mapping[str, CategoryRecord] = field(default_factory=lambda: _EMPTY)
    income_categories: Mapping[str, CategoryRecord] = field(default_factory=lambda: _EMPTY)
    transfer_categories: Mapping[str, CategoryRecord] = field(default_factory=lambda: _EMPTY)
    tags: Mapping[str, TagRecord] = field(default_factory=lambda: _EMPTY)

    def categories_for(self, tx_type: TransactionType) -> Mapping[str, CategoryRecord]:
        if tx_type is TransactionType.INCOME:
            return self.income_categories
        if tx_type is TransactionType.TRANSFER:
            return self.transfer_categories
        return self.expense_categories

    def resolve_account(self, name: str) -> int | None:
        if not name:
            return None
        account = self.accounts.get(name)
        return account.account_id if account is not None else None

    def resolve_category(self, name: str, tx_type: TransactionType) -> int | None:
        """Resolve ``name`` only against the table for ``tx_type``."""

        if not name:
            return None
        category = self.categories_for(tx_type).get(name)
        return category.category_id if category is not None else None

    def resolve_tags(self, names: Sequence[str]) -> tuple[int, ...]:
        """Return ids for the resolvable names, preserving input order."""

        ids: list[int] = []
        for n in names:
            tag = self.tags.get(n)
            if tag is not None:
                ids.append(tag.tag_id)
        return tuple(ids)


def _is_resolvable_category(c: CategoryRecord) -> bool:
    return not c.hidden and c.parent_category_id != LEVEL_ONE_CATEGORY_PARENT_ID


def build_lookup_tables(
    accounts: Iterable[AccountRecord],
    categories: Iterable[CategoryRecord],
    tags: Iterable[TagRecord],
) -> LookupTables:
    """Build the per-batch lookup snapshot from the user's records."""

    resolvable = [c for c in categories if _is_resolvable_category(c)]
    return LookupTables(
        accounts=_index_by_name((a for a in accounts if not a.hidden), lambda a: a.name),
        expense_categories=_index_by_name(
            (c for c in resolvable if c.type == CategoryType.EXPENSE), lambda c: c.name
        ),
        income_categories=_index_by_name(
            (c for c in resolvable if c.type == CategoryType.INCOME), lambda c: c.name
        ),
        transfer_categories=_index_by_name(
            (c for c in resolvable if c.type == CategoryType.TRANSFER), lambda c: c.name
        ),
        tags=_index_by_name((t for t in tags if not t.hidden), lambda t: t.name),
    )


__all__ = ["LookupTables", "build_lookup_tables"]
