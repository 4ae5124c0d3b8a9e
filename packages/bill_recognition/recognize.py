"""Batch orchestration: one uploaded screenshot -> validated candidates.

:func:`recognize_bill_image` runs the whole flow for a single request:

1. feature toggle, client timezone, user lookup and feature restriction;
2. upload validation (presence, size, extension);
3. OCR via the configured provider (bounded by its timeout);
4. bill-list parsing of the transcript, or mapping of structured items;
5. one read of the user's accounts, categories and tags into lookup tables;
6. per-item assembly, discarding rejected items;
7. an empty result is reported as :class:`EmptyRecognitionError`.

Steps 1-5 are batch-fatal and raise a :class:`RecognitionError` subclass.
Per-item failures in step 6 are contained and only logged. Nothing is
persisted; candidates are returned to the caller for review.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from threading import Event
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .assembler import assemble_candidate
from .bill_parser import parse_bill_list_text
from .config import RecognitionSettings
from .errors import (
    ConfigDisabledError,
    EmptyRecognitionError,
    InternalError,
    InvalidTimezoneError,
    PermissionDeniedError,
    ProviderFailureError,
    RecognitionError,
    UserNotFoundError,
)
from .logging_setup import get_logger
from .lookups import LookupTables, build_lookup_tables
from .models import (
    FeatureRestriction,
    RawRecognizedItem,
    RecognitionCandidate,
    RecognizedCandidateList,
)
from .outcomes import Resolved
from .pmap import p_map, p_map_skip
from .providers import OcrProvider, OcrResult, create_provider
from .providers.base import raise_if_cancelled
from .repository import BookkeepingReader
from .structured import raw_items_from_structured
from .uploads import ImageUpload, validate_image_upload

_logger = get_logger("bill_recognition.recognize")


@dataclass(frozen=True, slots=True)
class RecognitionRequest:
    """One recognition request as handed over by the web layer.

    ``timezone`` is the client's IANA zone name (or a ``tzinfo``); it decides
    the inferred year and how recognized wall-clock times map to epoch seconds.
    """

    uid: int
    image: ImageUpload | None
    timezone: str | tzinfo = "UTC"


def resolve_timezone(value: str | tzinfo) -> tzinfo:
    if isinstance(value, tzinfo):
        return value
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezoneError(f"unknown client timezone: {value!r}") from exc


def _check_access(uid: int, reader: BookkeepingReader) -> None:
    try:
        user = reader.get_user(uid)
    except Exception as e:  # noqa: BLE001
        _logger.error("recognize:user_lookup_failed uid=%d error=%s", uid, e.__class__.__name__)
        raise InternalError(f"failed to load user: {e}") from e
    if user is None:
        raise UserNotFoundError()
    if user.is_restricted(FeatureRestriction.CREATE_TRANSACTION_FROM_AI_IMAGE_RECOGNITION):
        raise PermissionDeniedError()


def _raw_items(result: OcrResult, reference_time: datetime) -> list[RawRecognizedItem]:
    if result.items is not None:
        return raw_items_from_structured(result.items)
    return list(parse_bill_list_text(result.text, reference_time))


def _load_lookups(uid: int, reader: BookkeepingReader) -> LookupTables:
    try:
        return build_lookup_tables(
            reader.get_all_accounts(uid),
            reader.get_all_categories(uid),
            reader.get_all_tags(uid),
        )
    except RecognitionError:
        raise
    except Exception as e:  # noqa: BLE001
        _logger.error("recognize:lookups_failed uid=%d error=%s", uid, e.__class__.__name__)
        raise InternalError(f"failed to load bookkeeping data: {e}") from e


def assemble_all(
    raw_items: list[RawRecognizedItem],
    tz: tzinfo,
    lookups: LookupTables,
    *,
    concurrency: int = 1,
) -> list[RecognitionCandidate]:
    """Assemble every raw item, keeping input order and dropping rejections."""

    def _one(raw: RawRecognizedItem) -> RecognitionCandidate | object:
        outcome = assemble_candidate(raw, tz, lookups)
        return outcome.value if isinstance(outcome, Resolved) else p_map_skip

    return p_map(raw_items, _one, concurrency=concurrency)


def recognize_bill_image(
    request: RecognitionRequest,
    *,
    settings: RecognitionSettings,
    reader: BookkeepingReader,
    provider: OcrProvider | None = None,
    now: Callable[[], datetime] | None = None,
    cancel: Event | None = None,
) -> RecognizedCandidateList:
    """Recognize transactions in ``request.image`` for user ``request.uid``.

    Parameters
    ----------
    settings:
        Feature toggle, upload limit and provider configuration.
    reader:
        Read access to the user's record, accounts, categories and tags.
    provider:
        OCR collaborator; built from ``settings`` when omitted.
    now:
        Clock returning an aware ``datetime`` (UTC by default); converted to
        the client timezone to infer the year of recognized dates.
    cancel:
        Optional event; once set, the remaining steps are skipped and
        :class:`~bill_recognition.errors.RecognitionCancelledError` is raised.

    Raises
    ------
    RecognitionError
        A subclass matching the failed step; see :mod:`bill_recognition.errors`.
    """

    if not settings.enabled:
        raise ConfigDisabledError()
    tz = resolve_timezone(request.timezone)
    _check_access(request.uid, reader)

    try:
        image = validate_image_upload(request.image, max_size=settings.max_image_bytes)
    except RecognitionError as e:
        _logger.warning("recognize:invalid_image uid=%d code=%s", request.uid, e.code)
        raise

    raise_if_cancelled(cancel)
    if provider is None:
        try:
            provider = create_provider(settings)
        except InternalError:
            _logger.error("recognize:provider_not_configured uid=%d", request.uid)
            raise
    try:
        ocr_result = provider.recognize(image.data, cancel=cancel)
    except ProviderFailureError as e:
        _logger.warning("recognize:ocr_failed uid=%d code=%s error=%s", request.uid, e.code, e)
        raise

    raise_if_cancelled(cancel)
    reference_time = (now or (lambda: datetime.now(UTC)))().astimezone(tz)
    raw_items = _raw_items(ocr_result, reference_time)
    if not raw_items:
        _logger.info("recognize:no_items uid=%d", request.uid)
        raise EmptyRecognitionError()

    lookups = _load_lookups(request.uid, reader)

    raise_if_cancelled(cancel)
    candidates = assemble_all(raw_items, tz, lookups, concurrency=settings.assemble_concurrency)
    _logger.info(
        "recognize:done uid=%d raw_items=%d candidates=%d",
        request.uid,
        len(raw_items),
        len(candidates),
    )
    if not candidates:
        raise EmptyRecognitionError()

    return RecognizedCandidateList(transactions=candidates)


__all__ = [
    "RecognitionRequest",
    "assemble_all",
    "recognize_bill_image",
    "resolve_timezone",
]
