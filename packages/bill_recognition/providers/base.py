"""Common shapes shared by OCR provider implementations."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Event
from typing import Protocol

from pydantic import BaseModel, ConfigDict, field_validator

from ..errors import RecognitionCancelledError


class StructuredOcrItem(BaseModel):
    """One entry of a structured provider's ``raw`` array.

    All fields are free text. Numeric amounts are accepted and converted to
    their string form so the normal amount parser applies.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    amount: str = ""
    classify: str = ""
    account: str = ""
    date: str = ""
    project: str = ""
    label: str = ""
    text: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_to_text(cls, v: object) -> object:
        if v is None:
            return ""
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("classify", "account", "date", "project", "label", "text", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v


@dataclass(frozen=True, slots=True)
class OcrResult:
    """What a provider recognized: either plain text or structured items."""

    text: str = ""
    items: tuple[StructuredOcrItem, ...] | None = None

    @property
    def is_structured(self) -> bool:
        return self.items is not None


class OcrProvider(Protocol):
    def recognize(self, image: bytes, *, cancel: Event | None = None) -> OcrResult: ...


def raise_if_cancelled(cancel: Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise RecognitionCancelledError()


__all__ = ["OcrProvider", "OcrResult", "StructuredOcrItem", "raise_if_cancelled"]
