from dataclasses import dataclass

import numpy as np

CHANNELS = 4


@dataclass
class PixelBuffer:
    """In-memory RGBA raster.

    ``pixels`` is a ``(height, width, 4)`` uint8 array. Stages mutate it in place;
    a buffer belongs to exactly one image's pipeline.
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"PixelBuffer dimensions must be positive, got {self.width}x{self.height}"
            )
        expected = (self.height, self.width, CHANNELS)
        if self.pixels.shape != expected:
            raise ValueError(
                f"PixelBuffer shape {self.pixels.shape} does not match {expected}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"PixelBuffer samples must be uint8, got {self.pixels.dtype}")

    @classmethod
    def from_samples(cls, width: int, height: int, samples: bytes | list[int]) -> "PixelBuffer":
        """Build a buffer from interleaved R,G,B,A samples."""
        if len(samples) != width * height * CHANNELS:
            raise ValueError(
                f"Expected {width * height * CHANNELS} samples for {width}x{height}, "
                f"got {len(samples)}"
            )
        if isinstance(samples, bytes):
            flat = np.frombuffer(samples, dtype=np.uint8)
        else:
            values = np.asarray(samples)
            if values.size and (values.min() < 0 or values.max() > 255):
                raise ValueError("PixelBuffer samples must be within [0, 255]")
            flat = values.astype(np.uint8)
        return cls(width, height, flat.reshape(height, width, CHANNELS).copy())

    @classmethod
    def filled(cls, width: int, height: int, rgba: tuple[int, int, int, int]) -> "PixelBuffer":
        pixels = np.empty((height, width, CHANNELS), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(width, height, pixels)

    @property
    def samples(self) -> bytes:
        return self.pixels.tobytes()

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.pixels.copy())
