from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from imagepipe.config.settings import Settings

DEFAULT_SUPPORTED_FORMATS: tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/webp",
    "image/tiff",
    "image/x-icon",
    "image/svg+xml",
    "image/heif",
    "image/heic",
    "image/jfif",
)

AUTO_BRIGHTNESS = "auto"


class ProcessingMode(str, Enum):
    DIRECT = "direct"
    ENHANCEMENT = "enhancement"
    COMPRESSION = "compression"
    BOTH = "both"


class CompressionLevel(str, Enum):
    """Ordered from weakest to strongest compression."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    HIGHEST = "highest"


@dataclass(frozen=True)
class RawImage:
    """Caller-owned image payload with its declared MIME type."""

    data: bytes
    mime_type: str
    name: str = "image"

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class EnhancementOptions:
    """Enhancement parameters. ``None`` means "use the default"."""

    brightness: float | Literal["auto"] | None = None
    contrast: float | None = None
    saturation: float | None = None
    texture: bool | None = None
    sharpening: bool | None = None


@dataclass(frozen=True)
class CompressionOptions:
    level: CompressionLevel | str | None = None
    max_dimension: int | None = None


@dataclass(frozen=True)
class ProcessingOptions:
    """Per-call options; limit overrides win over the processor config."""

    mode: ProcessingMode | str | None = None
    enhancement: EnhancementOptions | None = None
    compression: CompressionOptions | None = None
    max_file_size_mb: float | None = None
    max_image_count: int | None = None
    supported_formats: list[str] | None = None


@dataclass(frozen=True)
class ProcessingLimits:
    """Effective validation limits after merging config and call options."""

    max_file_size_mb: float
    max_image_count: int
    supported_formats: tuple[str, ...]


@dataclass(frozen=True)
class EncodedImage:
    data: bytes
    data_uri: str


@dataclass(frozen=True)
class ProcessedResult:
    """Output of one image's pipeline. Width/height are 0 in direct mode."""

    data: bytes
    data_uri: str
    width: int
    height: int
    mime_type: str = ""
    name: str = ""


@dataclass(frozen=True)
class ImageAnalysis:
    brightness: float
    contrast: float


@dataclass(frozen=True)
class ProcessorConfig:
    """Processor-wide limits, fixed at construction."""

    max_file_size_mb: float = 5
    max_image_count: int = 1
    supported_formats: tuple[str, ...] = DEFAULT_SUPPORTED_FORMATS

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ProcessorConfig":
        return cls(
            max_file_size_mb=settings.max_file_size_mb,
            max_image_count=settings.max_image_count,
            supported_formats=tuple(settings.supported_formats),
        )
