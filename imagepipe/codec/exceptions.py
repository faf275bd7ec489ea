from imagepipe.processor.exceptions import ImageProcessingError


class CodecError(ImageProcessingError):
    """Raised when the codec boundary fails."""


class DecodeFailedError(CodecError):
    """Raised when image bytes cannot be decoded into a pixel buffer."""


class EncodeFailedError(CodecError):
    """Raised when a pixel buffer cannot be encoded into the target format."""
