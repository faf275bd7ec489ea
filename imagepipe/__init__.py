from imagepipe.processor.models import (
    CompressionLevel,
    CompressionOptions,
    EnhancementOptions,
    ProcessedResult,
    ProcessingMode,
    ProcessingOptions,
    ProcessorConfig,
    RawImage,
)
from imagepipe.processor.processor import ImageProcessor, build_processor

__all__ = [
    "CompressionLevel",
    "CompressionOptions",
    "EnhancementOptions",
    "ImageProcessor",
    "ProcessedResult",
    "ProcessingMode",
    "ProcessingOptions",
    "ProcessorConfig",
    "RawImage",
    "build_processor",
]
