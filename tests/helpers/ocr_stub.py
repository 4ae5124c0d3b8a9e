"""Test helpers standing in for OCR providers and the bookkeeping reader.

``OcrStub`` matches the :class:`bill_recognition.providers.OcrProvider`
protocol and returns a canned :class:`OcrResult` (or raises a canned error),
recording each call so tests can assert on what the orchestrator sent.
``MemoryReader`` serves fixed records for one user without a database.
"""

from __future__ import annotations

from collections.abc import Sequence
from threading import Event
from typing import Any

from bill_recognition.models import AccountRecord, CategoryRecord, TagRecord, UserRecord
from bill_recognition.providers import OcrResult


class OcrStub:
    def __init__(
        self,
        result: OcrResult | None = None,
        *,
        error: Exception | None = None,
        on_call=None,
    ) -> None:
        self._result = result if result is not None else OcrResult()
        self._error = error
        self._on_call = on_call
        self.calls: list[dict[str, Any]] = []

    def recognize(self, image: bytes, *, cancel: Event | None = None) -> OcrResult:
        self.calls.append({"image": image, "cancel": cancel})
        if self._on_call is not None:
            self._on_call()
        if self._error is not None:
            raise self._error
        return self._result


class MemoryReader:
    def __init__(
        self,
        *,
        user: UserRecord | None,
        accounts: Sequence[AccountRecord] = (),
        categories: Sequence[CategoryRecord] = (),
        tags: Sequence[TagRecord] = (),
    ) -> None:
        self.user = user
        self.accounts = list(accounts)
        self.categories = list(categories)
        self.tags = list(tags)
        self.lookup_calls = 0

    def get_user(self, uid: int) -> UserRecord | None:
        if self.user is None or self.user.uid != uid:
            return None
        return self.user

    def get_all_accounts(self, uid: int) -> list[AccountRecord]:
        self.lookup_calls += 1
        return self.accounts

    def get_all_categories(self, uid: int) -> list[CategoryRecord]:
        return self.categories

    def get_all_tags(self, uid: int) -> list[TagRecord]:
        return self.tags
