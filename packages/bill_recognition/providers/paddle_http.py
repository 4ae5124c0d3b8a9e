"""HTTP OCR services (PaddleOCR-style) used to read bill screenshots.

Both variants receive the image as a multipart file field named ``image`` and
answer with JSON:

- text service: ``{"success": bool, "text": str, "error"?: str}``
- structured service: ``{"success": bool, "raw": [{amount, classify, account,
  date, project, label, text}, ...], "error"?: str}``

Any transport, decode, or provider-reported failure becomes a
:class:`~bill_recognition.errors.ProviderFailureError`. The whole exchange (connect, upload,
streamed download) is bounded by one total deadline; exceeding it raises
:class:`OcrTimeoutError`. The request runs on a worker thread so the caller
can stop waiting on the deadline or on cancellation while a read is blocked.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, wait
from threading import Event
from typing import NoReturn

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import OcrTimeoutError, ProviderFailureError
from ..logging_setup import get_logger
from .base import OcrResult, StructuredOcrItem, raise_if_cancelled

_logger = get_logger("bill_recognition.providers.paddle_http")

DEFAULT_TIMEOUT_SEC: float = 30.0
_UPLOAD_FIELD = "image"
_UPLOAD_FILENAME = "bill.jpg"
_POLL_INTERVAL_SEC: float = 0.1
_CHUNK_SIZE = 4096


class PaddleTextResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    text: str = ""
    error: str | None = None


class PaddleStructuredResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    raw: list[StructuredOcrItem] = []
    error: str | None = None


def _provider_error_detail(error: str | None) -> str:
    if error:
        return f"paddle ocr failed: {error}"
    return "paddle ocr failed without error message"


class _PaddleHttpProvider:
    def __init__(self, endpoint: str, *, timeout: float = DEFAULT_TIMEOUT_SEC) -> None:
        if not endpoint:
            raise ValueError("paddle ocr endpoint is not configured")
        self.endpoint = endpoint
        self.timeout = timeout

    def _post_image(self, image: bytes, cancel: Event | None) -> bytes:
        if not image:
            raise ProviderFailureError("image data is empty")
        raise_if_cancelled(cancel)
        files = {_UPLOAD_FIELD: (_UPLOAD_FILENAME, image, "application/octet-stream")}
        abort = Event()
        deadline = time.monotonic() + self.timeout
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="paddle-ocr")
        try:
            future = pool.submit(self._fetch, files, abort, deadline)
            while not wait((future,), timeout=_POLL_INTERVAL_SEC).done:
                if cancel is not None and cancel.is_set():
                    abort.set()
                    raise_if_cancelled(cancel)
                if time.monotonic() >= deadline:
                    abort.set()
                    self._raise_timeout("deadline exceeded")
            try:
                body = future.result()
            except requests.Timeout as exc:
                self._raise_timeout(exc)
            except requests.RequestException as exc:
                _logger.warning(
                    "paddle_ocr:request_failed endpoint=%s error=%s", self.endpoint, exc
                )
                raise ProviderFailureError(f"request paddle ocr endpoint failed: {exc}") from exc
        finally:
            # A blocked worker is left to its per-read socket timeout.
            pool.shutdown(wait=False, cancel_futures=True)
        # A cancelled request discards whatever came back.
        raise_if_cancelled(cancel)
        return body

    def _fetch(self, files: dict, abort: Event, deadline: float) -> bytes:
        body = bytearray()
        with requests.post(self.endpoint, files=files, timeout=self.timeout, stream=True) as resp:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if abort.is_set():
                    break
                if time.monotonic() >= deadline:
                    raise requests.ReadTimeout("total deadline exceeded while reading response")
                body.extend(chunk)
        return bytes(body)

    def _raise_timeout(self, cause: object) -> NoReturn:
        _logger.warning(
            "paddle_ocr:timeout endpoint=%s timeout_sec=%.1f", self.endpoint, self.timeout
        )
        exc = OcrTimeoutError(f"request paddle ocr endpoint timed out: {cause}")
        if isinstance(cause, BaseException):
            raise exc from cause
        raise exc

    def _decode[M: BaseModel](self, body: bytes, model: type[M]) -> M:
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            _logger.warning(
                "paddle_ocr:decode_failed endpoint=%s errors=%d", self.endpoint, exc.error_count()
            )
            raise ProviderFailureError(f"decode paddle ocr response failed: {exc}") from exc


class PaddleTextOcrProvider(_PaddleHttpProvider):
    """Text-returning service; the transcript is parsed by the bill parser."""

    def recognize(self, image: bytes, *, cancel: Event | None = None) -> OcrResult:
        decoded = self._decode(self._post_image(image, cancel), PaddleTextResponse)
        if not decoded.success:
            raise ProviderFailureError(_provider_error_detail(decoded.error))
        return OcrResult(text=decoded.text.strip())


class PaddleStructuredOcrProvider(_PaddleHttpProvider):
    """Structured service returning pre-split transaction items."""

    def recognize(self, image: bytes, *, cancel: Event | None = None) -> OcrResult:
        decoded = self._decode(self._post_image(image, cancel), PaddleStructuredResponse)
        if not decoded.success:
            raise ProviderFailureError(_provider_error_detail(decoded.error))
        if not decoded.raw:
            raise ProviderFailureError("paddle ocr returned no raw items")
        return OcrResult(items=tuple(decoded.raw))


__all__ = [
    "DEFAULT_TIMEOUT_SEC",
    "PaddleStructuredOcrProvider",
    "PaddleStructuredResponse",
    "PaddleTextOcrProvider",
    "PaddleTextResponse",
]
