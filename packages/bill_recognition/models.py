"""Data models for ``bill_recognition``.

Three groups live here:

- Bookkeeping vocabulary: transaction/category type codes and the user
  feature-restriction flag consulted before recognition runs.
- Lightweight read records (:class:`AccountRecord`, :class:`CategoryRecord`,
  :class:`TagRecord`, :class:`UserRecord`) that decouple the pipeline from the
  ORM; lookup tables are built from these.
- Pipeline records: :class:`RawRecognizedItem` (unvalidated parser output) and
  :class:`RecognitionCandidate` (validated, caller-facing), plus the
  :class:`RecognizedCandidateList` response envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Bookkeeping vocabulary
# ---------------------------------------------------------------------------


class TransactionType(IntEnum):
    INCOME = 2
    EXPENSE = 3
    TRANSFER = 4


class CategoryType(IntEnum):
    INCOME = 1
    EXPENSE = 2
    TRANSFER = 3


class FeatureRestriction(IntFlag):
    """Bits of ``users.feature_restriction`` relevant to this package."""

    CREATE_TRANSACTION_FROM_AI_IMAGE_RECOGNITION = 1 << 16


# Parent id carried by level-one categories (roots of the two-level tree).
LEVEL_ONE_CATEGORY_PARENT_ID = 0


# ---------------------------------------------------------------------------
# Read records (collaborator output)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UserRecord:
    uid: int
    feature_restriction: int = 0

    def is_restricted(self, feature: FeatureRestriction) -> bool:
        return bool(self.feature_restriction & feature)


@dataclass(frozen=True, slots=True)
class AccountRecord:
    account_id: int
    name: str
    hidden: bool = False


@dataclass(frozen=True, slots=True)
class CategoryRecord:
    category_id: int
    name: str
    type: CategoryType
    parent_category_id: int = LEVEL_ONE_CATEGORY_PARENT_ID
    hidden: bool = False


@dataclass(frozen=True, slots=True)
class TagRecord:
    tag_id: int
    name: str
    hidden: bool = False


# ---------------------------------------------------------------------------
# Pipeline records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawRecognizedItem:
    """A transaction fragment as recognized, before any validation.

    Every field is free text exactly as produced by the parser or the
    structured OCR provider. ``type`` is one of ``"income"``, ``"expense"``,
    ``"transfer"`` or empty; ``time`` and ``amount`` may be empty or
    malformed. ``destination_amount`` is only meaningful for transfers.
    """

    type: str = ""
    time: str = ""
    amount: str = ""
    destination_amount: str = ""
    account_name: str = ""
    destination_account_name: str = ""
    category_name: str = ""
    tag_names: tuple[str, ...] = ()
    description: str = ""


class RecognitionCandidate(BaseModel):
    """A validated transaction candidate ready for user review.

    Amounts are integer minor units (cents) and always non-negative; the
    direction is carried by ``type``. ``time`` is epoch seconds. Reference
    fields stay ``None`` when the corresponding name could not be resolved.
    Serialized with camelCase keys and string ids, omitting unset fields.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: TransactionType
    source_amount: int
    time: int | None = None
    destination_amount: int | None = None
    category_id: int | None = None
    source_account_id: int | None = None
    destination_account_id: int | None = None
    tag_ids: tuple[int, ...] = ()
    comment: str | None = None

    @field_serializer("category_id", "source_account_id", "destination_account_id")
    def _id_as_string(self, v: int | None) -> str | None:
        return None if v is None else str(v)

    @field_serializer("tag_ids")
    def _tag_ids_as_strings(self, v: tuple[int, ...]) -> list[str]:
        return [str(i) for i in v]


class RecognizedCandidateList(BaseModel):
    """Response envelope returned to the caller."""

    model_config = ConfigDict(frozen=True)

    transactions: list[RecognitionCandidate]

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "TransactionType",
    "CategoryType",
    "FeatureRestriction",
    "LEVEL_ONE_CATEGORY_PARENT_ID",
    "UserRecord",
    "AccountRecord",
    "CategoryRecord",
    "TagRecord",
    "RawRecognizedItem",
    "RecognitionCandidate",
    "RecognizedCandidateList",
]
