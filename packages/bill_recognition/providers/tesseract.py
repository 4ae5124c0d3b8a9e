"""Local OCR fallback driving the ``tesseract`` executable.

The image is written to a per-invocation temporary directory together with
the output base path; ``tesseract <input> <output-base> -l <lang>`` writes
``<output-base>.txt``, which is read back as the transcript. The directory
name is unique per call, so concurrent requests never share files, and it is
removed on every exit path.

The process is polled so that the timeout and the optional cancellation
event can both kill it.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import time
from pathlib import Path
from threading import Event

from ..errors import OcrExecutableNotFoundError, OcrProcessError, OcrTimeoutError
from ..logging_setup import get_logger
from .base import OcrResult, raise_if_cancelled

_logger = get_logger("bill_recognition.providers.tesseract")

DEFAULT_COMMAND = "tesseract"
# simplified Chinese + English
DEFAULT_LANGUAGE = "chi_sim+eng"
DEFAULT_TIMEOUT_SEC: float = 30.0
_POLL_INTERVAL_SEC: float = 0.2


class TesseractOcrProvider:
    def __init__(
        self,
        *,
        command: str = DEFAULT_COMMAND,
        language: str = DEFAULT_LANGUAGE,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self.command = command
        self.language = language or DEFAULT_LANGUAGE
        self.timeout = timeout

    def _resolve_executable(self) -> str:
        path = shutil.which(self.command)
        if path is None:
            raise OcrExecutableNotFoundError(f"ocr executable not found: {self.command}")
        return path

    def _run(self, argv: list[str], cancel: Event | None) -> None:
        try:
            proc = subprocess.Popen(argv, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except FileNotFoundError as exc:
            raise OcrExecutableNotFoundError(f"ocr executable not found: {argv[0]}") from exc
        except OSError as exc:
            _logger.warning("tesseract:start_failed command=%s error=%s", argv[0], exc)
            raise OcrProcessError(f"failed to start ocr process: {exc}") from exc

        deadline = time.monotonic() + self.timeout
        while True:
            try:
                _stdout, stderr = proc.communicate(timeout=_POLL_INTERVAL_SEC)
                break
            except subprocess.TimeoutExpired:
                if cancel is not None and cancel.is_set():
                    proc.kill()
                    proc.communicate()
                    raise_if_cancelled(cancel)
                if time.monotonic() >= deadline:
                    proc.kill()
                    proc.communicate()
                    _logger.warning("tesseract:timeout timeout_sec=%.1f", self.timeout)
                    raise OcrTimeoutError(
                        f"ocr process exceeded {self.timeout:.0f}s and was killed"
                    ) from None

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            _logger.warning("tesseract:failed returncode=%d stderr=%r", proc.returncode, detail)
            raise OcrProcessError(f"ocr process exited with code {proc.returncode}: {detail}")

    def recognize(self, image: bytes, *, cancel: Event | None = None) -> OcrResult:
        if not image:
            raise OcrProcessError("image data is empty")
        raise_if_cancelled(cancel)
        executable = self._resolve_executable()

        try:
            with tempfile.TemporaryDirectory(prefix="bill-ocr-") as tmp:
                input_path = Path(tmp) / "input.img"
                output_base = Path(tmp) / "output"
                input_path.write_bytes(image)
                self._run(
                    [executable, str(input_path), str(output_base), "-l", self.language],
                    cancel,
                )
                output_path = output_base.with_suffix(".txt")
                try:
                    text = output_path.read_text(encoding="utf-8")
                except FileNotFoundError as exc:
                    raise OcrProcessError("ocr process produced no text output") from exc
        except OSError as exc:
            _logger.warning("tesseract:io_failed error=%s", exc)
            raise OcrProcessError(f"ocr scratch file i/o failed: {exc}") from exc

        return OcrResult(text=text.strip())


__all__ = [
    "DEFAULT_COMMAND",
    "DEFAULT_LANGUAGE",
    "DEFAULT_TIMEOUT_SEC",
    "TesseractOcrProvider",
]
