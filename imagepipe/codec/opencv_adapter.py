import cv2
import numpy as np

from imagepipe.codec.base import BaseImageCodec, quality_to_percent, to_data_uri
from imagepipe.codec.exceptions import DecodeFailedError, EncodeFailedError
from imagepipe.imaging.buffer import PixelBuffer
from imagepipe.processor.models import EncodedImage

CV2_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/jfif": ".jpg",
    "image/png": ".png",
    "image/bmp": ".bmp",
    "image/webp": ".webp",
    "image/tiff": ".tiff",
}
QUALITY_FLAGS: dict[str, int] = {
    ".jpg": cv2.IMWRITE_JPEG_QUALITY,
    ".webp": cv2.IMWRITE_WEBP_QUALITY,
}


class OpenCvCodec(BaseImageCodec):
    """Decodes and encodes images using OpenCV."""

    def decode(self, data: bytes, mime_type: str) -> PixelBuffer:
        try:
            decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        except cv2.error as exc:
            raise DecodeFailedError(f"opencv could not decode {mime_type}: {exc}") from exc
        if decoded is None:
            raise DecodeFailedError(f"opencv could not decode {mime_type}")
        rgba = self._to_rgba(decoded)
        height, width = rgba.shape[:2]
        return PixelBuffer(width, height, np.ascontiguousarray(rgba))

    def encode(
        self,
        buffer: PixelBuffer,
        mime_type: str,
        quality: float | None = None,
    ) -> EncodedImage:
        ext = CV2_EXTENSIONS.get(mime_type)
        if ext is None:
            raise EncodeFailedError(f"opencv cannot encode {mime_type}")
        if ext == ".jpg":
            bgr = cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGR)
        else:
            bgr = cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGRA)
        params: list[int] = []
        percent = quality_to_percent(quality)
        if ext in QUALITY_FLAGS and percent is not None:
            params = [QUALITY_FLAGS[ext], percent]
        try:
            ok, encoded = cv2.imencode(ext, bgr, params)
        except cv2.error as exc:
            raise EncodeFailedError(f"opencv could not encode {mime_type}: {exc}") from exc
        if not ok:
            raise EncodeFailedError(f"opencv could not encode {mime_type}")
        data = encoded.tobytes()
        return EncodedImage(data=data, data_uri=to_data_uri(data, mime_type))

    def _to_rgba(self, decoded: np.ndarray) -> np.ndarray:
        if decoded.dtype != np.uint8:
            # 16-bit sources are scaled down to 8 bits per sample
            decoded = (decoded / 257).astype(np.uint8)
        if decoded.ndim == 2:
            return cv2.cvtColor(decoded, cv2.COLOR_GRAY2RGBA)
        if decoded.shape[2] == 4:
            return cv2.cvtColor(decoded, cv2.COLOR_BGRA2RGBA)
        return cv2.cvtColor(decoded, cv2.COLOR_BGR2RGBA)
