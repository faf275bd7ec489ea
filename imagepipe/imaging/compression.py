"""Dimension-capped resampling and level-to-quality mapping."""

import numpy as np
from PIL import Image

from imagepipe.imaging.buffer import PixelBuffer
from imagepipe.logging.logger import Log
from imagepipe.processor.models import CompressionLevel, CompressionOptions
from imagepipe.processor.options import check_max_dimension

QUALITY_BY_LEVEL: dict[CompressionLevel, float] = {
    CompressionLevel.LOW: 0.9,
    CompressionLevel.NORMAL: 0.75,
    CompressionLevel.HIGH: 0.5,
    CompressionLevel.HIGHEST: 0.2,
}
UNKNOWN_LEVEL_QUALITY = 0.8

MAX_DIMENSION_BY_LEVEL: dict[CompressionLevel, int] = {
    CompressionLevel.LOW: 4096,
    CompressionLevel.NORMAL: 2048,
    CompressionLevel.HIGH: 1600,
    CompressionLevel.HIGHEST: 1024,
}


def coerce_level(level: CompressionLevel | str | None) -> CompressionLevel | None:
    """Return the matching level, or ``None`` for unset and unknown values."""
    if level is None:
        return None
    try:
        return CompressionLevel(level)
    except ValueError:
        return None


def quality_for_level(level: CompressionLevel | str | None) -> float:
    known = coerce_level(level)
    if known is None:
        return UNKNOWN_LEVEL_QUALITY
    return QUALITY_BY_LEVEL[known]


def default_max_dimension(level: CompressionLevel | str | None) -> int:
    known = coerce_level(level) or CompressionLevel.NORMAL
    return MAX_DIMENSION_BY_LEVEL[known]


def target_dimensions(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    """Scale so the longer edge equals ``max_dimension``. Never upscales."""
    longer = max(width, height)
    if longer <= max_dimension:
        return width, height
    scale = max_dimension / longer
    if width >= height:
        return max_dimension, max(1, round(height * scale))
    return max(1, round(width * scale)), max_dimension


def resample(buffer: PixelBuffer, max_dimension: int) -> PixelBuffer:
    """Return a buffer no larger than ``max_dimension`` on its longer edge."""
    width, height = target_dimensions(buffer.width, buffer.height, max_dimension)
    if (width, height) == (buffer.width, buffer.height):
        return buffer
    image = Image.fromarray(buffer.pixels)
    resized = image.resize((width, height), Image.Resampling.LANCZOS)
    Log.debug(f"Resampled {buffer.width}x{buffer.height} -> {width}x{height}")
    return PixelBuffer(width, height, np.asarray(resized, dtype=np.uint8).copy())


class CompressionEngine:
    """Resamples a decoded buffer and picks the encode quality for a level."""

    def compress(
        self, buffer: PixelBuffer, options: CompressionOptions
    ) -> tuple[PixelBuffer, float]:
        check_max_dimension(options.max_dimension)
        max_dimension = options.max_dimension
        if max_dimension is None:
            max_dimension = default_max_dimension(options.level)
        return resample(buffer, max_dimension), quality_for_level(options.level)
