"""Tonal and spatial enhancement of pixel buffers.

Steps run in a fixed order: brightness, contrast, saturation, sharpening, texture.
Every step clamps to [0, 255] so no step raises on overflow.
"""

import numpy as np

from imagepipe.imaging.buffer import PixelBuffer
from imagepipe.imaging.convolution import clamp_to_uint8, convolve
from imagepipe.logging.logger import Log
from imagepipe.processor.models import AUTO_BRIGHTNESS, EnhancementOptions, ImageAnalysis

CONTRAST_CONSTANT = 259.0
CONTRAST_LIMIT = 255.0
LUMA_WEIGHTS = np.array([0.2989, 0.5870, 0.1140], dtype=np.float64)

DARK_IMAGE_THRESHOLD = 100.0
DARK_IMAGE_BRIGHTNESS = 10.0
BRIGHT_IMAGE_BRIGHTNESS = -70.0

SHARPEN_KERNEL: tuple[float, ...] = (
    0, -1, 0,
    -1, 5, -1,
    0, -1, 0,
)  # fmt: skip
TEXTURE_KERNEL: tuple[float, ...] = tuple(
    w / 12 for w in (
        -1, -1, -1,
        -1, 20, -1,
        -1, -1, -1,
    )
)  # fmt: skip


def analyze(buffer: PixelBuffer) -> ImageAnalysis:
    """Mean per-pixel brightness and mean absolute channel deviation from it."""
    rgb = buffer.rgb.astype(np.float64)
    per_pixel = rgb.mean(axis=2)
    deviation = np.abs(rgb - per_pixel[..., None]).sum(axis=2)
    return ImageAnalysis(
        brightness=float(per_pixel.mean()),
        contrast=float(deviation.mean()),
    )


def default_brightness(analysis: ImageAnalysis) -> float:
    if analysis.brightness < DARK_IMAGE_THRESHOLD:
        return DARK_IMAGE_BRIGHTNESS
    return BRIGHT_IMAGE_BRIGHTNESS


def adjust_brightness(buffer: PixelBuffer, delta: float) -> None:
    buffer.rgb[...] = clamp_to_uint8(buffer.rgb.astype(np.float64) + delta)


def contrast_factor(contrast: float) -> float:
    contrast = min(max(contrast, -CONTRAST_LIMIT), CONTRAST_LIMIT)
    return (CONTRAST_CONSTANT * (contrast + 255)) / (255 * (CONTRAST_CONSTANT - contrast))


def adjust_contrast(buffer: PixelBuffer, contrast: float) -> None:
    factor = contrast_factor(contrast)
    rgb = buffer.rgb.astype(np.float64)
    buffer.rgb[...] = clamp_to_uint8(factor * (rgb - 128) + 128)


def adjust_saturation(buffer: PixelBuffer, saturation: float) -> None:
    rgb = buffer.rgb.astype(np.float64)
    luma = (rgb @ LUMA_WEIGHTS)[..., None]
    buffer.rgb[...] = clamp_to_uint8(luma + saturation * (rgb - luma))


def sharpen(buffer: PixelBuffer) -> None:
    buffer.pixels[...] = clamp_to_uint8(convolve(buffer, SHARPEN_KERNEL))


def apply_texture(buffer: PixelBuffer) -> None:
    buffer.pixels[...] = clamp_to_uint8(convolve(buffer, TEXTURE_KERNEL))


class EnhancementEngine:
    """Applies resolved enhancement options to a decoded buffer in place."""

    def enhance(self, buffer: PixelBuffer, options: EnhancementOptions) -> PixelBuffer:
        brightness = self._resolve_brightness(buffer, options)
        if brightness is not None:
            adjust_brightness(buffer, brightness)
        if options.contrast is not None:
            adjust_contrast(buffer, options.contrast)
        if options.saturation is not None:
            adjust_saturation(buffer, options.saturation)
        if options.sharpening:
            sharpen(buffer)
        if options.texture:
            apply_texture(buffer)
        Log.debug(
            f"Enhanced {buffer.width}x{buffer.height} buffer: brightness={brightness}, "
            f"contrast={options.contrast}, saturation={options.saturation}, "
            f"sharpening={bool(options.sharpening)}, texture={bool(options.texture)}"
        )
        return buffer

    def _resolve_brightness(
        self, buffer: PixelBuffer, options: EnhancementOptions
    ) -> float | None:
        if options.brightness is None:
            return None
        if options.brightness == AUTO_BRIGHTNESS:
            return default_brightness(analyze(buffer))
        return float(options.brightness)
