"""Map structured OCR provider items onto :class:`RawRecognizedItem`.

Field mapping::

    amount   -> amount
    classify -> type, when it names a transaction type; otherwise category
    account  -> account name
    date     -> time (normalized later by the assembler)
    project  -> first tag name
    label    -> further tag names (split on commas / 、 / whitespace)
    text     -> description

When ``classify`` is not a type word the type falls back to the amount's sign,
the same convention the plain-text parser uses. Transfers can therefore only
come from an explicit ``classify`` value.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import RawRecognizedItem
from .providers.base import StructuredOcrItem

_TYPE_WORDS: dict[str, str] = {
    "income": "income",
    "expense": "expense",
    "transfer": "transfer",
    "收入": "income",
    "支出": "expense",
    "转账": "transfer",
}

_LABEL_SPLIT_RE = re.compile(r"[,，、;；\s]+")


def _tag_names(project: str, label: str) -> tuple[str, ...]:
    names = [project] + _LABEL_SPLIT_RE.split(label)
    seen: dict[str, None] = {}
    for n in names:
        n = n.strip()
        if n:
            seen.setdefault(n, None)
    return tuple(seen)


def raw_item_from_structured(item: StructuredOcrItem) -> RawRecognizedItem:
    tx_type = _TYPE_WORDS.get(item.classify.lower())
    category_name = ""
    if tx_type is None:
        category_name = item.classify
        tx_type = "expense" if item.amount.startswith("-") else "income"
    return RawRecognizedItem(
        type=tx_type,
        time=item.date,
        amount=item.amount,
        account_name=item.account,
        category_name=category_name,
        tag_names=_tag_names(item.project, item.label),
        description=item.text,
    )


def raw_items_from_structured(items: Iterable[StructuredOcrItem]) -> list[RawRecognizedItem]:
    return [raw_item_from_structured(i) for i in items]


__all__ = ["raw_item_from_structured", "raw_items_from_structured"]
