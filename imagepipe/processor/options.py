"""Resolution of effective options.

Precedence, lowest to highest: processor config or step defaults, then the
per-call options. A per-call field of ``None`` means "not given".
"""

from dataclasses import fields, replace
from typing import TypeVar

from imagepipe.processor.exceptions import InvalidConfigurationError
from imagepipe.processor.models import (
    CompressionLevel,
    CompressionOptions,
    EnhancementOptions,
    ProcessingLimits,
    ProcessingOptions,
    ProcessorConfig,
)

DEFAULT_ENHANCEMENT = EnhancementOptions(
    brightness=-10,
    contrast=45,
    saturation=1.0,
    texture=True,
    sharpening=True,
)
DEFAULT_COMPRESSION = CompressionOptions(level=CompressionLevel.NORMAL)

_T = TypeVar("_T", EnhancementOptions, CompressionOptions)
_V = TypeVar("_V")


def merge_options(defaults: _T, overrides: _T | None) -> _T:
    """Return a copy of ``defaults`` with every non-``None`` override applied."""
    if overrides is None:
        return defaults
    given = {
        f.name: getattr(overrides, f.name)
        for f in fields(overrides)
        if getattr(overrides, f.name) is not None
    }
    return replace(defaults, **given)


def resolve_enhancement(options: ProcessingOptions) -> EnhancementOptions:
    return merge_options(DEFAULT_ENHANCEMENT, options.enhancement)


def resolve_compression(options: ProcessingOptions) -> CompressionOptions:
    """Merge call options over the compression defaults.

    Raises:
        InvalidConfigurationError: if ``max_dimension`` is given but not positive.
    """
    resolved = merge_options(DEFAULT_COMPRESSION, options.compression)
    check_max_dimension(resolved.max_dimension)
    return resolved


def check_max_dimension(max_dimension: int | None) -> None:
    if max_dimension is not None and max_dimension <= 0:
        raise InvalidConfigurationError(
            f"max_dimension must be a positive integer. Given: {max_dimension}"
        )


def resolve_limits(config: ProcessorConfig, options: ProcessingOptions) -> ProcessingLimits:
    """Merge call overrides over the processor config.

    Raises:
        InvalidConfigurationError: if any limit ends up unset or empty.
    """
    max_file_size_mb = _pick(options.max_file_size_mb, config.max_file_size_mb)
    max_image_count = _pick(options.max_image_count, config.max_image_count)
    supported_formats = _pick(options.supported_formats, config.supported_formats)

    if max_image_count is None or max_image_count <= 0:
        raise InvalidConfigurationError("max_image_count is not defined")
    if max_file_size_mb is None or max_file_size_mb <= 0:
        raise InvalidConfigurationError("max_file_size_mb is not defined")
    if not supported_formats:
        raise InvalidConfigurationError("supported_formats is not defined or empty")

    return ProcessingLimits(
        max_file_size_mb=max_file_size_mb,
        max_image_count=max_image_count,
        supported_formats=tuple(supported_formats),
    )


def _pick(override: _V | None, base: _V) -> _V:
    return base if override is None else override
