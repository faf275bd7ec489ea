import base64
import io

import numpy as np
import pytest
from PIL import Image

from imagepipe.codec.base import quality_to_percent, to_data_uri
from imagepipe.codec.exceptions import CodecError, DecodeFailedError, EncodeFailedError
from imagepipe.codec.pillow_adapter import PillowCodec
from imagepipe.imaging.buffer import PixelBuffer


class TestDataUri:
    def test_base64_payload(self) -> None:
        uri = to_data_uri(b"abc", "image/png")
        assert uri == "data:image/png;base64," + base64.b64encode(b"abc").decode()


class TestQualityToPercent:
    @pytest.mark.parametrize(
        ("quality", "percent"), [(0.75, 75), (0.2, 20), (0.0, 1), (1.5, 100), (None, None)]
    )
    def test_maps_to_encoder_scale(self, quality: float | None, percent: int | None) -> None:
        assert quality_to_percent(quality) == percent


class TestPillowDecode:
    def test_decodes_png_to_rgba(self, png_bytes: bytes) -> None:
        buffer = PillowCodec().decode(png_bytes, "image/png")
        assert (buffer.width, buffer.height) == (40, 20)
        assert buffer.pixels.shape == (20, 40, 4)
        assert np.all(buffer.alpha == 255)

    def test_preserves_exact_png_pixels(self, png_bytes: bytes) -> None:
        buffer = PillowCodec().decode(png_bytes, "image/png")
        assert buffer.pixels[0, 0].tolist() == [0, 0, 96, 255]
        assert buffer.pixels[19, 39].tolist() == [255, 255, 96, 255]

    def test_raises_decode_failed_on_garbage(self) -> None:
        with pytest.raises(DecodeFailedError, match="image/png"):
            PillowCodec().decode(b"not an image", "image/png")


class TestPillowEncode:
    def test_png_round_trip_is_lossless(self) -> None:
        buffer = PixelBuffer.from_samples(2, 1, [1, 2, 3, 4, 250, 251, 252, 253])
        encoded = PillowCodec().encode(buffer, "image/png")
        with Image.open(io.BytesIO(encoded.data)) as image:
            assert image.format == "PNG"
            assert np.asarray(image.convert("RGBA")).tolist() == [
                [[1, 2, 3, 4], [250, 251, 252, 253]]
            ]
        assert encoded.data_uri.startswith("data:image/png;base64,")

    def test_jpeg_drops_alpha(self) -> None:
        buffer = PixelBuffer.filled(8, 8, (200, 10, 10, 128))
        encoded = PillowCodec().encode(buffer, "image/jpeg", 0.9)
        with Image.open(io.BytesIO(encoded.data)) as image:
            assert image.format == "JPEG"
            assert image.mode == "RGB"

    def test_lower_quality_gives_smaller_jpeg(self) -> None:
        rng = np.random.default_rng(11)
        pixels = rng.integers(0, 256, size=(64, 64, 4), dtype=np.uint8)
        buffer = PixelBuffer(64, 64, pixels)
        high = PillowCodec().encode(buffer, "image/jpeg", 0.9)
        low = PillowCodec().encode(buffer, "image/jpeg", 0.2)
        assert len(low.data) < len(high.data)

    def test_unsupported_target_raises_encode_failed(self) -> None:
        buffer = PixelBuffer.filled(2, 2, (0, 0, 0, 255))
        with pytest.raises(EncodeFailedError, match="image/svg\\+xml"):
            PillowCodec().encode(buffer, "image/svg+xml")

    def test_codec_errors_share_base(self) -> None:
        assert issubclass(DecodeFailedError, CodecError)
        assert issubclass(EncodeFailedError, CodecError)
