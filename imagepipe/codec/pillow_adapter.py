import io

import numpy as np
from PIL import Image

from imagepipe.codec.base import BaseImageCodec, quality_to_percent, to_data_uri
from imagepipe.codec.exceptions import DecodeFailedError, EncodeFailedError
from imagepipe.imaging.buffer import PixelBuffer
from imagepipe.processor.models import EncodedImage

PIL_FORMATS: dict[str, str] = {
    "image/jpeg": "JPEG",
    "image/jfif": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/bmp": "BMP",
    "image/webp": "WEBP",
    "image/tiff": "TIFF",
    "image/x-icon": "ICO",
}
LOSSY_FORMATS = frozenset({"JPEG", "WEBP"})
NO_ALPHA_FORMATS = frozenset({"JPEG"})


class PillowCodec(BaseImageCodec):
    """Decodes and encodes images using Pillow."""

    def decode(self, data: bytes, mime_type: str) -> PixelBuffer:
        try:
            with Image.open(io.BytesIO(data)) as image:
                rgba = image.convert("RGBA")
            pixels = np.asarray(rgba, dtype=np.uint8).copy()
            return PixelBuffer(rgba.width, rgba.height, pixels)
        except Exception as exc:
            raise DecodeFailedError(f"pillow could not decode {mime_type}: {exc}") from exc

    def encode(
        self,
        buffer: PixelBuffer,
        mime_type: str,
        quality: float | None = None,
    ) -> EncodedImage:
        pil_format = PIL_FORMATS.get(mime_type)
        if pil_format is None:
            raise EncodeFailedError(f"pillow cannot encode {mime_type}")
        try:
            image = Image.fromarray(buffer.pixels)
            if pil_format in NO_ALPHA_FORMATS:
                image = image.convert("RGB")
            save_kwargs: dict[str, object] = {}
            percent = quality_to_percent(quality)
            if pil_format in LOSSY_FORMATS and percent is not None:
                save_kwargs["quality"] = percent
            out = io.BytesIO()
            image.save(out, format=pil_format, **save_kwargs)
            data = out.getvalue()
        except Exception as exc:
            raise EncodeFailedError(f"pillow could not encode {mime_type}: {exc}") from exc
        return EncodedImage(data=data, data_uri=to_data_uri(data, mime_type))
