"""Public API surface for the ``bill_recognition`` package.

:func:`recognize_bill_image` is the full batch flow (see
:mod:`bill_recognition.recognize`). :func:`recognize_from_text` runs only the
parser and the assembler over an already-recognized transcript, which is what
offline tools and tests need when no OCR service or database is involved.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

from .bill_parser import parse_bill_list_text
from .errors import EmptyRecognitionError
from .lookups import LookupTables
from .models import RecognizedCandidateList
from .recognize import RecognitionRequest, assemble_all, recognize_bill_image, resolve_timezone


def recognize_from_text(
    text: str,
    *,
    timezone: str | tzinfo,
    reference_time: datetime,
    lookups: LookupTables | None = None,
) -> RecognizedCandidateList:
    """Parse ``text`` and assemble candidates without OCR or database access.

    ``reference_time`` supplies the year for the transcript's dates; naive
    values are interpreted in ``timezone``. Raises
    :class:`~bill_recognition.errors.EmptyRecognitionError` when nothing
    survives, exactly like the full flow.
    """

    tz = resolve_timezone(timezone)
    ref = reference_time.replace(tzinfo=tz) if reference_time.tzinfo is None else reference_time
    raw_items = list(parse_bill_list_text(text, ref.astimezone(tz)))
    candidates = assemble_all(raw_items, tz, lookups or LookupTables())
    if not candidates:
        raise EmptyRecognitionError()
    return RecognizedCandidateList(transactions=candidates)


__all__ = ["RecognitionRequest", "recognize_bill_image", "recognize_from_text"]
