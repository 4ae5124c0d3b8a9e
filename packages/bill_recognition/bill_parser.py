"""Parser for OCR transcripts of bill / transaction-list screenshots.

Each transaction line is expected to look like::

    京东超市 2月7日 21:49 -100.00

i.e. free text, a ``<month>月<day>日 <hour>:<minute>`` date, and a trailing
signed amount. Lines that do not carry both a trailing amount and a date are
treated as non-transaction text (headers, totals, footers) and skipped.

The transcript has no year, so it is taken from the caller's reference time.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import datetime

from .models import RawRecognizedItem

# Amount anchored at end of line: -123.45, +5.23, 100
_AMOUNT_RE = re.compile(r"([+-]?\d+\.?\d*)\s*$")
# Chinese month/day with time: 2月7日 21:49, 12月31日 09:00
_DATE_RE = re.compile(r"(\d{1,2})月(\d{1,2})日\s*(\d{1,2}):(\d{2})")

DESCRIPTION_PLACEHOLDER = "OCR"


def _long_datetime(year: int, month: int, day: int, hour: int, minute: int) -> str:
    # Source granularity is minutes, so seconds are always zero.
    return f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:00"


def _type_from_amount(amount: str) -> str:
    # No sign is read as income. This is a parsing convention only; the plain
    # text heuristic never produces "transfer".
    return "expense" if amount.startswith("-") else "income"


def _parse_line(line: str, year: int) -> RawRecognizedItem | None:
    amount_m = _AMOUNT_RE.search(line)
    if amount_m is None:
        return None
    amount = amount_m.group(1)
    rest = line[: amount_m.start()].strip()

    date_m = _DATE_RE.search(rest)
    if date_m is None:
        return None
    month, day, hour, minute = (int(g) for g in date_m.groups())

    description = rest[: date_m.start()].strip() or rest[date_m.end() :].strip()
    return RawRecognizedItem(
        type=_type_from_amount(amount),
        time=_long_datetime(year, month, day, hour, minute),
        amount=amount,
        description=description or DESCRIPTION_PLACEHOLDER,
    )


def parse_bill_list_text(text: str, reference_time: datetime) -> Iterator[RawRecognizedItem]:
    """Yield one :class:`RawRecognizedItem` per transaction line, in input order.

    ``reference_time`` should already be expressed in the client's timezone;
    only its calendar year is used. Unmatched lines are dropped silently.
    """

    year = reference_time.year
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        item = _parse_line(line, year)
        if item is not None:
            yield item


__all__ = ["DESCRIPTION_PLACEHOLDER", "parse_bill_list_text"]
