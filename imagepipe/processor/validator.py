"""Batch validation run before any image is decoded."""

from collections.abc import Sequence

from imagepipe.processor.exceptions import (
    CountExceededError,
    InvalidFileError,
    SizeExceededError,
    UnsupportedFormatError,
)
from imagepipe.processor.models import ProcessingLimits, RawImage

BYTES_PER_MB = 1024 * 1024


def validate_batch(images: Sequence[RawImage | None], limits: ProcessingLimits) -> None:
    """Check the batch count, then each image's size and format in order.

    Raises:
        CountExceededError: if the batch is larger than ``max_image_count``.
        InvalidFileError: if a batch entry is missing.
        SizeExceededError: if an image is larger than ``max_file_size_mb``.
        UnsupportedFormatError: if an image's MIME type is not supported.
    """
    if len(images) > limits.max_image_count:
        raise CountExceededError(
            f"Cannot process more than {limits.max_image_count} images at a time. "
            f"Files provided: {len(images)}"
        )
    for image in images:
        validate_image(image, limits)


def validate_image(image: RawImage | None, limits: ProcessingLimits) -> None:
    if image is None:
        raise InvalidFileError("Invalid file")

    size_mb = image.size_bytes / BYTES_PER_MB
    limit = format_limit(limits.max_file_size_mb)
    if size_mb > limits.max_file_size_mb:
        raise SizeExceededError(
            f"File size exceeds the maximum limit of {limit} MB. "
            f"File size: {size_mb:.2f} MB"
        )

    if image.mime_type not in limits.supported_formats:
        raise UnsupportedFormatError(
            f"Unsupported file format: {image.mime_type}. "
            f"Supported formats: {', '.join(limits.supported_formats)}"
        )


def format_limit(value: float) -> str:
    """Render a configured limit exactly: ``5`` as "5", ``5.5`` as "5.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
