import numpy as np
import pytest

from imagepipe.imaging.buffer import PixelBuffer


class TestPixelBufferInvariants:
    def test_rejects_zero_width(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            PixelBuffer(0, 1, np.zeros((1, 0, 4), dtype=np.uint8))

    def test_rejects_shape_mismatch(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            PixelBuffer(2, 2, np.zeros((2, 3, 4), dtype=np.uint8))

    def test_rejects_non_uint8_samples(self) -> None:
        with pytest.raises(ValueError, match="uint8"):
            PixelBuffer(1, 1, np.zeros((1, 1, 4), dtype=np.float32))


class TestPixelBufferFromSamples:
    def test_interleaves_rgba_row_major(self) -> None:
        buffer = PixelBuffer.from_samples(2, 1, [1, 2, 3, 4, 5, 6, 7, 8])
        assert buffer.pixels[0, 1].tolist() == [5, 6, 7, 8]
        assert buffer.samples == bytes([1, 2, 3, 4, 5, 6, 7, 8])

    def test_rejects_wrong_sample_count(self) -> None:
        with pytest.raises(ValueError, match="Expected 8 samples"):
            PixelBuffer.from_samples(2, 1, [0, 0, 0, 0])

    def test_rejects_out_of_range_samples(self) -> None:
        with pytest.raises(ValueError, match=r"\[0, 255\]"):
            PixelBuffer.from_samples(1, 1, [0, 0, 256, 0])

    def test_accepts_bytes(self) -> None:
        buffer = PixelBuffer.from_samples(1, 1, b"\x01\x02\x03\x04")
        assert buffer.pixels.tolist() == [[[1, 2, 3, 4]]]


class TestPixelBufferViews:
    def test_rgb_view_writes_through(self) -> None:
        buffer = PixelBuffer.filled(1, 1, (0, 0, 0, 7))
        buffer.rgb[...] = 9
        assert buffer.pixels.tolist() == [[[9, 9, 9, 7]]]

    def test_copy_is_independent(self) -> None:
        buffer = PixelBuffer.filled(1, 1, (1, 1, 1, 1))
        clone = buffer.copy()
        clone.pixels[...] = 0
        assert buffer.pixels.tolist() == [[[1, 1, 1, 1]]]
