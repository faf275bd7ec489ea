import base64
from abc import ABC, abstractmethod

from imagepipe.imaging.buffer import PixelBuffer
from imagepipe.processor.models import EncodedImage


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Build a ``data:<mime>;base64,<payload>`` string for ``data``."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


class BaseImageCodec(ABC):
    """Contract for all image codec adapters."""

    @abstractmethod
    def decode(self, data: bytes, mime_type: str) -> PixelBuffer:
        """Decode image bytes into an RGBA pixel buffer.

        Args:
            data: Raw image file content.
            mime_type: Declared MIME type of ``data``.

        Returns:
            PixelBuffer holding the first frame as RGBA.

        Raises:
            DecodeFailedError: if the bytes cannot be decoded.
        """

    @abstractmethod
    def encode(
        self,
        buffer: PixelBuffer,
        mime_type: str,
        quality: float | None = None,
    ) -> EncodedImage:
        """Encode a pixel buffer into ``mime_type``.

        Args:
            buffer: Pixels to encode.
            mime_type: Target MIME type; no fallback format is tried.
            quality: Encode quality in (0, 1]; ignored by lossless formats.

        Raises:
            EncodeFailedError: if the format is unsupported or encoding fails.
        """


def quality_to_percent(quality: float | None) -> int | None:
    if quality is None:
        return None
    return min(100, max(1, round(quality * 100)))
