"""Square-kernel spatial filtering over RGBA pixel buffers."""

import math
from collections.abc import Sequence

import numpy as np

from imagepipe.imaging.buffer import PixelBuffer


def kernel_side(kernel: Sequence[float]) -> int:
    """Return the side length of a flat square kernel.

    Raises:
        ValueError: if the kernel is not square with an odd side.
    """
    side = round(math.sqrt(len(kernel)))
    if side * side != len(kernel) or side % 2 == 0:
        raise ValueError(
            f"Kernel must be square with an odd side, got {len(kernel)} weights"
        )
    return side


def convolve(buffer: PixelBuffer, kernel: Sequence[float]) -> np.ndarray:
    """Convolve the RGB channels of ``buffer`` with a flat, row-major kernel.

    Taps that fall outside the image contribute nothing (zero padding). The result
    is a float64 ``(height, width, 4)`` array whose alpha is copied from the source.
    Values are not clamped; callers clamp before writing back.
    """
    side = kernel_side(kernel)
    half = side // 2
    weights = np.asarray(kernel, dtype=np.float64).reshape(side, side)

    rgb = buffer.rgb.astype(np.float64)
    padded = np.pad(rgb, ((half, half), (half, half), (0, 0)), mode="constant")

    out = np.zeros((buffer.height, buffer.width, 4), dtype=np.float64)
    # Shifted-slice accumulation, one pass per kernel tap
    for ky in range(side):
        for kx in range(side):
            weight = weights[ky, kx]
            if weight == 0:
                continue
            out[..., :3] += weight * padded[ky : ky + buffer.height, kx : kx + buffer.width]
    out[..., 3] = buffer.alpha
    return out


def clamp_to_uint8(values: np.ndarray) -> np.ndarray:
    """Round and clamp float samples into [0, 255] uint8."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)
