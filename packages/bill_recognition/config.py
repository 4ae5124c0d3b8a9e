"""Runtime settings for bill recognition, read from environment variables.

Entry points load a local ``.env`` (``python-dotenv``, never overriding
variables already set) before calling :func:`load_settings`. Variables:

==========================================  =========================  ==============
Variable                                    Meaning                    Default
==========================================  =========================  ==============
``BILL_RECOGNITION_ENABLED``                feature toggle             ``false``
``BILL_RECOGNITION_MAX_IMAGE_BYTES``        upload size limit          10 MiB
``BILL_RECOGNITION_OCR_PROVIDER``           ``paddle-text`` |          ``paddle-text``
                                            ``paddle-structured`` |
                                            ``tesseract``
``BILL_RECOGNITION_OCR_ENDPOINT``           HTTP provider endpoint     (empty)
``BILL_RECOGNITION_OCR_TIMEOUT``            OCR timeout, seconds       ``30``
``BILL_RECOGNITION_TESSERACT_CMD``          local executable           ``tesseract``
``BILL_RECOGNITION_TESSERACT_LANG``         OCR language               ``chi_sim+eng``
``BILL_RECOGNITION_ASSEMBLE_CONCURRENCY``   assembler worker threads   ``1``
==========================================  =========================  ==============
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

type OcrProviderKind = Literal["paddle-text", "paddle-structured", "tesseract"]

_PROVIDER_KINDS: tuple[str, ...] = ("paddle-text", "paddle-structured", "tesseract")
_PREFIX = "BILL_RECOGNITION_"

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class RecognitionSettings:
    enabled: bool = False
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    ocr_provider: OcrProviderKind = "paddle-text"
    ocr_endpoint: str = ""
    ocr_timeout_sec: float = 30.0
    tesseract_command: str = "tesseract"
    tesseract_language: str = "chi_sim+eng"
    assemble_concurrency: int = 1


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


def _parse_positive(name: str, value: str | None, default, cast):
    if value is None or not value.strip():
        return default
    try:
        parsed = cast(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return parsed


def load_settings(env: Mapping[str, str] | None = None) -> RecognitionSettings:
    """Build :class:`RecognitionSettings` from ``env`` (``os.environ`` by default)."""

    src = os.environ if env is None else env

    def get(key: str) -> str | None:
        return src.get(_PREFIX + key)

    provider = (get("OCR_PROVIDER") or "paddle-text").strip().lower()
    if provider not in _PROVIDER_KINDS:
        raise ValueError(
            f"{_PREFIX}OCR_PROVIDER must be one of {', '.join(_PROVIDER_KINDS)}; got {provider!r}"
        )

    defaults = RecognitionSettings()
    return RecognitionSettings(
        enabled=_parse_bool(get("ENABLED"), defaults.enabled),
        max_image_bytes=_parse_positive(
            _PREFIX + "MAX_IMAGE_BYTES", get("MAX_IMAGE_BYTES"), defaults.max_image_bytes, int
        ),
        ocr_provider=provider,  # type: ignore[arg-type]
        ocr_endpoint=(get("OCR_ENDPOINT") or "").strip(),
        ocr_timeout_sec=_parse_positive(
            _PREFIX + "OCR_TIMEOUT", get("OCR_TIMEOUT"), defaults.ocr_timeout_sec, float
        ),
        tesseract_command=(get("TESSERACT_CMD") or "").strip() or defaults.tesseract_command,
        tesseract_language=(get("TESSERACT_LANG") or "").strip() or defaults.tesseract_language,
        assemble_concurrency=_parse_positive(
            _PREFIX + "ASSEMBLE_CONCURRENCY",
            get("ASSEMBLE_CONCURRENCY"),
            defaults.assemble_concurrency,
            int,
        ),
    )


__all__ = ["DEFAULT_MAX_IMAGE_BYTES", "OcrProviderKind", "RecognitionSettings", "load_settings"]
