import io
from collections.abc import Callable

import numpy as np
import pytest
from PIL import Image

from imagepipe.imaging.buffer import PixelBuffer


def encode_image(image: Image.Image, fmt: str, **kwargs: object) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt, **kwargs)
    return buf.getvalue()


def gradient_image(width: int, height: int) -> Image.Image:
    """RGB image with a horizontal red ramp and a vertical green ramp."""
    xs = np.linspace(0, 255, width, dtype=np.float64)
    ys = np.linspace(0, 255, height, dtype=np.float64)
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[..., 0] = xs[None, :].round().astype(np.uint8)
    pixels[..., 1] = ys[:, None].round().astype(np.uint8)
    pixels[..., 2] = 96
    return Image.fromarray(pixels)


@pytest.fixture()
def png_bytes() -> bytes:
    """A 40x20 RGB gradient encoded as PNG."""
    return encode_image(gradient_image(40, 20), "PNG")


@pytest.fixture()
def large_png_bytes() -> bytes:
    """A 3000x1500 PNG, larger than the normal level's default cap."""
    return encode_image(gradient_image(3000, 1500), "PNG")


@pytest.fixture()
def jpeg_bytes() -> bytes:
    """A 64x48 RGB gradient encoded as JPEG."""
    return encode_image(gradient_image(64, 48), "JPEG", quality=95)


@pytest.fixture()
def flat_buffer() -> PixelBuffer:
    return PixelBuffer.filled(5, 4, (100, 150, 200, 255))


@pytest.fixture()
def make_png() -> Callable[[int, int], bytes]:
    """Factory for gradient PNGs of a given size."""

    def _make(width: int, height: int) -> bytes:
        return encode_image(gradient_image(width, height), "PNG")

    return _make
