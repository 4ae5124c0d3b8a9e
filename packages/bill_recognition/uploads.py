"""Validation of the uploaded bill screenshot."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ImageEmptyError, ImageTooLargeError, NoImageError, UnsupportedImageTypeError

IMAGE_CONTENT_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


@dataclass(frozen=True, slots=True)
class ImageUpload:
    filename: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class ValidatedImage:
    data: bytes
    content_type: str


def get_file_extension(filename: str) -> str:
    """Return the lower-cased extension without the dot (``""`` when absent)."""

    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


def get_image_content_type(extension: str) -> str | None:
    return IMAGE_CONTENT_TYPES.get(extension.lower())


def validate_image_upload(upload: ImageUpload | None, *, max_size: int) -> ValidatedImage:
    """Check presence, size and type of ``upload``; return its bytes with the content type."""

    if upload is None:
        raise NoImageError()
    if upload.size < 1:
        raise ImageEmptyError()
    if upload.size > max_size:
        raise ImageTooLargeError(
            f"the upload file size {upload.size} exceeds the maximum size {max_size}"
        )
    extension = get_file_extension(upload.filename)
    content_type = get_image_content_type(extension)
    if content_type is None:
        raise UnsupportedImageTypeError(f"the file extension {extension!r} is not supported")
    return ValidatedImage(data=upload.data, content_type=content_type)


__all__ = [
    "IMAGE_CONTENT_TYPES",
    "ImageUpload",
    "ValidatedImage",
    "get_file_extension",
    "get_image_content_type",
    "validate_image_upload",
]
