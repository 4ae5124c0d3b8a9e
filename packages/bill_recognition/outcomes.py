"""Tagged per-stage results used by the recognition assembler.

Each stage of the per-item pipeline returns one of:

- :class:`Resolved` – the stage produced a value;
- :class:`Omitted` – a soft failure: the field is left unset and processing
  continues;
- :class:`Rejected` – a hard failure: the whole item is excluded from the
  batch output.

Keeping the three cases as distinct types (rather than ``None`` sentinels)
makes the contained-versus-fatal distinction explicit at every call site.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RejectionReason(StrEnum):
    EMPTY_TYPE = "empty_type"
    INVALID_TYPE = "invalid_type"
    MISSING_AMOUNT = "missing_amount"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_DESTINATION_AMOUNT = "invalid_destination_amount"


@dataclass(frozen=True, slots=True)
class Resolved[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Omitted:
    detail: str = ""


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: RejectionReason
    detail: str = ""


type SoftOutcome[T] = Resolved[T] | Omitted
type HardOutcome[T] = Resolved[T] | Rejected
type StageOutcome[T] = Resolved[T] | Omitted | Rejected


__all__ = [
    "RejectionReason",
    "Resolved",
    "Omitted",
    "Rejected",
    "SoftOutcome",
    "HardOutcome",
    "StageOutcome",
]
