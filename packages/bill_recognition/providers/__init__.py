"""OCR provider collaborators and the settings-driven factory."""

from __future__ import annotations

from ..config import RecognitionSettings
from ..errors import InternalError
from .base import OcrProvider, OcrResult, StructuredOcrItem
from .paddle_http import PaddleStructuredOcrProvider, PaddleTextOcrProvider
from .tesseract import TesseractOcrProvider


def create_provider(settings: RecognitionSettings) -> OcrProvider:
    """Instantiate the OCR provider selected by ``settings.ocr_provider``.

    HTTP providers need an endpoint; a missing one is a server configuration
    problem and surfaces as :class:`InternalError`.
    """

    if settings.ocr_provider == "tesseract":
        return TesseractOcrProvider(
            command=settings.tesseract_command,
            language=settings.tesseract_language,
            timeout=settings.ocr_timeout_sec,
        )
    if not settings.ocr_endpoint:
        raise InternalError("paddle ocr endpoint is not configured")
    if settings.ocr_provider == "paddle-structured":
        return PaddleStructuredOcrProvider(settings.ocr_endpoint, timeout=settings.ocr_timeout_sec)
    return PaddleTextOcrProvider(settings.ocr_endpoint, timeout=settings.ocr_timeout_sec)


__all__ = [
    "OcrProvider",
    "OcrResult",
    "StructuredOcrItem",
    "PaddleStructuredOcrProvider",
    "PaddleTextOcrProvider",
    "TesseractOcrProvider",
    "create_provider",
]
