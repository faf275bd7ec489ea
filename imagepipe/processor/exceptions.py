class ImageProcessingError(Exception):
    """Base exception for all image processing errors."""


class ValidationError(ImageProcessingError):
    """Raised before any pixel work when a batch breaks the configured limits."""


class InvalidFileError(ValidationError):
    """Raised when a batch entry is missing."""


class InvalidConfigurationError(ValidationError):
    """Raised when a limit resolves to unset or empty after merging options."""


class CountExceededError(ValidationError):
    """Raised when a batch holds more images than allowed."""


class SizeExceededError(ValidationError):
    """Raised when a single image is larger than the size limit."""


class UnsupportedFormatError(ValidationError):
    """Raised when an image's declared MIME type is not supported."""


class InvalidModeError(ImageProcessingError):
    """Raised when a processing mode is not recognized."""
