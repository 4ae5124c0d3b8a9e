"""Logging for the ``bill_recognition`` package.

Library modules only ever call ``get_logger("bill_recognition.<module>")``;
the package logger stays silent (a ``NullHandler``) until a host process
calls :func:`configure_logging`. The CLI does so in its root callback; a web
application embedding the recognizer usually configures logging itself and
never calls it.

Messages use an ``operation:event key=value`` shape, for example
``recognize:done uid=42 raw_items=3 candidates=2``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "bill_recognition"
LEVEL_ENV = "BILL_RECOGNITION_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def _level_from_text(text: str) -> int | None:
    text = text.strip().upper()
    if text.isdigit():
        return int(text)
    value = logging.getLevelNamesMapping().get(text)
    return value if isinstance(value, int) else None


def resolve_level(level: int | str | None = None) -> int:
    """Explicit ``level``, else ``BILL_RECOGNITION_LOG_LEVEL``, else INFO."""

    if isinstance(level, int):
        return level
    for candidate in (level, os.getenv(LEVEL_ENV)):
        if candidate:
            parsed = _level_from_text(candidate)
            if parsed is not None:
                return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one ``StreamHandler`` to the package logger; later calls are no-ops.

    ``stream`` defaults to ``sys.stderr`` as it is at call time.
    """

    global _configured
    if _configured:
        return

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)
    pkg.addHandler(handler)
    pkg.setLevel(resolved)
    # Records stop here instead of reaching the root logger a second time.
    pkg.propagate = False
    _configured = True


def reset_logging() -> None:
    """Detach handlers added by :func:`configure_logging` and re-enable propagation."""

    global _configured
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True
    _configured = False


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging", "resolve_level"]
