"""Date and amount normalization for recognized transactions.

- :func:`normalize_date_text` pads the three accepted date shapes to the
  canonical long form ``YYYY-MM-DD HH:MM:SS``; anything else passes through
  unchanged so a later parse can report it.
- :func:`parse_canonical_datetime` converts the canonical form to epoch
  seconds in a caller-supplied timezone, returning ``None`` when it does not
  parse.
- :func:`parse_amount` converts a signed decimal string to integer minor units
  (cents) and raises ``ValueError`` on malformed input.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from decimal import Decimal, InvalidOperation

LONG_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_LONG_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
_LONG_DATETIME_WITHOUT_SECOND_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}")
_LONG_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Optional sign, integer digits, optional point with up to two fraction digits.
_AMOUNT_RE = re.compile(r"([+-]?)(\d+)(?:\.(\d{0,2}))?")

_MINOR_UNITS_PER_MAJOR = 100


def normalize_date_text(raw: str) -> str:
    """Return ``raw`` padded to ``YYYY-MM-DD HH:MM:SS`` when it has a known shape.

    Accepted shapes: the full long date-time, a long date-time without
    seconds (``:00`` appended), and a date alone (`` 00:00:00`` appended).
    Idempotent: canonical input is returned as-is.
    """

    if _LONG_DATETIME_RE.fullmatch(raw):
        return raw
    if _LONG_DATETIME_WITHOUT_SECOND_RE.fullmatch(raw):
        return raw + ":00"
    if _LONG_DATE_RE.fullmatch(raw):
        return raw + " 00:00:00"
    return raw


def parse_canonical_datetime(text: str, tz: tzinfo) -> int | None:
    """Parse a canonical long date-time in ``tz`` and return epoch seconds."""

    try:
        naive = datetime.strptime(text, LONG_DATETIME_FORMAT)
    except ValueError:
        return None
    return int(naive.replace(tzinfo=tz).timestamp())


def parse_amount(text: str) -> int:
    """Parse a signed decimal string into integer minor units.

    ``"123.45"`` -> ``12345``, ``"-100.00"`` -> ``-10000``, ``"+5.2"`` ->
    ``520``. Surrounding whitespace is ignored; currency symbols, thousands
    separators and more than two fraction digits are rejected.
    """

    s = text.strip()
    if not s:
        raise ValueError("amount is empty")
    m = _AMOUNT_RE.fullmatch(s)
    if m is None:
        raise ValueError(f"invalid amount: {text!r}")
    sign, whole, fraction = m.groups()
    try:
        d = Decimal(f"{whole}.{fraction or '0'}")
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {text!r}") from exc
    minor = int(d * _MINOR_UNITS_PER_MAJOR)
    return -minor if sign == "-" else minor


__all__ = [
    "LONG_DATETIME_FORMAT",
    "normalize_date_text",
    "parse_canonical_datetime",
    "parse_amount",
]
