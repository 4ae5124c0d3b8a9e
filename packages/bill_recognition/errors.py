"""Batch-level error taxonomy for bill recognition.

Every batch-fatal condition raised by :func:`bill_recognition.recognize.recognize_bill_image`
is a :class:`RecognitionError`. Each class carries a stable ``code`` that host
applications map to their own response codes, and a short caller-facing
``message``. Per-item assembler failures are never raised; see
:mod:`bill_recognition.outcomes`.
"""

from __future__ import annotations


class RecognitionError(Exception):
    """Base class for all batch-level recognition failures."""

    code: str = "operation_failed"
    default_message: str = "operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ---- Configuration / permission ---------------------------------------------


class ConfigDisabledError(RecognitionError):
    code = "config_disabled"
    default_message = "image recognition is not enabled"


class PermissionDeniedError(RecognitionError):
    code = "permission_denied"
    default_message = "not permitted to perform this action"


class UserNotFoundError(RecognitionError):
    code = "user_not_found"
    default_message = "user not found"


# ---- Input validation --------------------------------------------------------


class InputValidationError(RecognitionError):
    code = "input_invalid"
    default_message = "request parameter is invalid"


class InvalidTimezoneError(InputValidationError):
    code = "client_timezone_invalid"
    default_message = "client timezone is invalid"


class NoImageError(InputValidationError):
    code = "no_image"
    default_message = "there is no image in the request"


class ImageEmptyError(InputValidationError):
    code = "image_empty"
    default_message = "uploaded image is empty"


class ImageTooLargeError(InputValidationError):
    code = "image_too_large"
    default_message = "uploaded image exceeds the maximum file size"


class UnsupportedImageTypeError(InputValidationError):
    code = "image_type_not_supported"
    default_message = "image type is not supported"


# ---- OCR provider --------------------------------------------------------------


class ProviderFailureError(RecognitionError):
    code = "ocr_provider_failed"
    default_message = "ocr provider failed"


class OcrTimeoutError(ProviderFailureError):
    code = "ocr_provider_timeout"
    default_message = "ocr provider timed out"


class OcrExecutableNotFoundError(ProviderFailureError):
    code = "ocr_executable_not_found"
    default_message = "ocr executable not found"


class OcrProcessError(ProviderFailureError):
    code = "ocr_process_failed"
    default_message = "ocr process exited with an error"


# ---- Results / internal ------------------------------------------------------


class EmptyRecognitionError(RecognitionError):
    code = "no_transaction_information"
    default_message = "no transaction information detected in image"


class RecognitionCancelledError(RecognitionError):
    code = "cancelled"
    default_message = "recognition was cancelled"


class InternalError(RecognitionError):
    code = "operation_failed"
    default_message = "operation failed"


__all__ = [
    "RecognitionError",
    "ConfigDisabledError",
    "PermissionDeniedError",
    "UserNotFoundError",
    "InputValidationError",
    "InvalidTimezoneError",
    "NoImageError",
    "ImageEmptyError",
    "ImageTooLargeError",
    "UnsupportedImageTypeError",
    "ProviderFailureError",
    "OcrTimeoutError",
    "OcrExecutableNotFoundError",
    "OcrProcessError",
    "EmptyRecognitionError",
    "RecognitionCancelledError",
    "InternalError",
]
