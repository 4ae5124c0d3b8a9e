"""Public interface for the ``bill_recognition`` package.

Turns an OCR transcript of a bill / transaction-list screenshot into
validated transaction candidates for user review. This module only
re-exports the stable API and models.
"""

from .api import RecognitionRequest, recognize_bill_image, recognize_from_text
from .assembler import assemble_candidate
from .bill_parser import parse_bill_list_text
from .config import RecognitionSettings, load_settings
from .errors import EmptyRecognitionError, RecognitionError
from .lookups import LookupTables, build_lookup_tables
from .models import (
    AccountRecord,
    CategoryRecord,
    CategoryType,
    RawRecognizedItem,
    RecognitionCandidate,
    RecognizedCandidateList,
    TagRecord,
    TransactionType,
    UserRecord,
)
from .normalize import normalize_date_text, parse_amount, parse_canonical_datetime
from .uploads import ImageUpload

__all__ = [
    # API
    "recognize_bill_image",
    "recognize_from_text",
    "parse_bill_list_text",
    "assemble_candidate",
    "build_lookup_tables",
    "normalize_date_text",
    "parse_amount",
    "parse_canonical_datetime",
    "load_settings",
    # Models / types
    "RecognitionRequest",
    "RecognitionSettings",
    "ImageUpload",
    "LookupTables",
    "RawRecognizedItem",
    "RecognitionCandidate",
    "RecognizedCandidateList",
    "TransactionType",
    "CategoryType",
    "AccountRecord",
    "CategoryRecord",
    "TagRecord",
    "UserRecord",
    # Errors
    "RecognitionError",
    "EmptyRecognitionError",
]
