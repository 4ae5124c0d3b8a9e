"""Per-item assembly of recognition candidates.

:func:`assemble_candidate` turns one :class:`RawRecognizedItem` into a
:class:`RecognitionCandidate`, or rejects it. Stages run top to bottom and
only short-circuit on a hard failure:

1. type classification (hard: empty or unknown token)
2. category resolution against the type's table (soft)
3. date normalization and parse (soft)
4. source amount, plus destination amount for transfers (hard)
5. source/destination account resolution (soft)
6. tag resolution, dropping unknown names (soft)
7. description passthrough into ``comment``

Rejections are logged here and never raised; the orchestrator only sees that
no candidate came back.
"""

from __future__ import annotations

from datetime import tzinfo

from .logging_setup import get_logger
from .lookups import LookupTables
from .models import RawRecognizedItem, RecognitionCandidate, TransactionType
from .normalize import normalize_date_text, parse_amount, parse_canonical_datetime
from .outcomes import (
    HardOutcome,
    Omitted,
    Rejected,
    RejectionReason,
    Resolved,
    SoftOutcome,
    StageOutcome,
)

_logger = get_logger("bill_recognition.assembler")

_TYPE_TOKENS: dict[str, TransactionType] = {
    "income": TransactionType.INCOME,
    "expense": TransactionType.EXPENSE,
    "transfer": TransactionType.TRANSFER,
}


# ---- Stages ------------------------------------------------------------------


def classify_type(token: str) -> HardOutcome[TransactionType]:
    if not token:
        return Rejected(RejectionReason.EMPTY_TYPE)
    tx_type = _TYPE_TOKENS.get(token)
    if tx_type is None:
        return Rejected(RejectionReason.INVALID_TYPE, token)
    return Resolved(tx_type)


def resolve_time(raw_time: str, tz: tzinfo) -> SoftOutcome[int]:
    if not raw_time:
        return Omitted()
    ts = parse_canonical_datetime(normalize_date_text(raw_time), tz)
    if ts is None:
        return Omitted(raw_time)
    return Resolved(ts)


def parse_source_amount(raw_amount: str) -> HardOutcome[int]:
    if not raw_amount.strip():
        return Rejected(RejectionReason.MISSING_AMOUNT)
    try:
        return Resolved(abs(parse_amount(raw_amount)))
    except ValueError:
        return Rejected(RejectionReason.INVALID_AMOUNT, raw_amount)


def parse_destination_amount(raw: RawRecognizedItem, tx_type: TransactionType) -> StageOutcome[int]:
    if tx_type is not TransactionType.TRANSFER or not raw.destination_amount.strip():
        return Omitted()
    try:
        return Resolved(abs(parse_amount(raw.destination_amount)))
    except ValueError:
        return Rejected(RejectionReason.INVALID_DESTINATION_AMOUNT, raw.destination_amount)


def _soft_id(value: int | None, name: str) -> SoftOutcome[int]:
    return Resolved(value) if value is not None else Omitted(name)


def _value_or_none[T](outcome: SoftOutcome[T] | StageOutcome[T]) -> T | None:
    return outcome.value if isinstance(outcome, Resolved) else None


def _log_rejection(rejected: Rejected) -> None:
    if rejected.reason is RejectionReason.EMPTY_TYPE:
        _logger.warning("assemble:rejected reason=%s", rejected.reason)
    elif rejected.reason is RejectionReason.INVALID_TYPE:
        _logger.error(
            "assemble:rejected reason=%s type=%r (provider contract violation)",
            rejected.reason,
            rejected.detail,
        )
    else:
        _logger.error("assemble:rejected reason=%s amount=%r", rejected.reason, rejected.detail)


# ---- Public ------------------------------------------------------------------


def assemble_candidate(
    raw: RawRecognizedItem,
    tz: tzinfo,
    lookups: LookupTables,
) -> HardOutcome[RecognitionCandidate]:
    """Validate and resolve one raw item.

    Returns ``Resolved(candidate)`` or ``Rejected(reason)``. Name resolution
    and date parsing failures only leave the corresponding field unset.
    """

    type_outcome = classify_type(raw.type)
    if isinstance(type_outcome, Rejected):
        _log_rejection(type_outcome)
        return type_outcome
    tx_type = type_outcome.value

    category = _soft_id(lookups.resolve_category(raw.category_name, tx_type), raw.category_name)
    if isinstance(category, Omitted) and raw.category_name:
        _logger.debug("assemble:category_unmatched name=%r type=%s", raw.category_name, tx_type)

    time_outcome = resolve_time(raw.time, tz)
    if isinstance(time_outcome, Omitted) and time_outcome.detail:
        _logger.warning("assemble:time_invalid time=%r", time_outcome.detail)

    source_amount = parse_source_amount(raw.amount)
    if isinstance(source_amount, Rejected):
        _log_rejection(source_amount)
        return source_amount

    destination_amount = parse_destination_amount(raw, tx_type)
    if isinstance(destination_amount, Rejected):
        _log_rejection(destination_amount)
        return destination_amount

    source_account = _soft_id(lookups.resolve_account(raw.account_name), raw.account_name)
    destination_account = _soft_id(
        lookups.resolve_account(raw.destination_account_name), raw.destination_account_name
    )
    tag_ids = lookups.resolve_tags(raw.tag_names)
    if len(tag_ids) < len(raw.tag_names):
        _logger.debug(
            "assemble:tags_unmatched requested=%d resolved=%d", len(raw.tag_names), len(tag_ids)
        )

    return Resolved(
        RecognitionCandidate(
            type=tx_type,
            time=_value_or_none(time_outcome),
            source_amount=source_amount.value,
            destination_amount=_value_or_none(destination_amount),
            category_id=_value_or_none(category),
            source_account_id=_value_or_none(source_account),
            destination_account_id=_value_or_none(destination_account),
            tag_ids=tag_ids,
            comment=raw.description or None,
        )
    )


__all__ = [
    "assemble_candidate",
    "classify_type",
    "parse_destination_amount",
    "parse_source_amount",
    "resolve_time",
]
