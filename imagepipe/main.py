import argparse
import mimetypes
import sys
from collections.abc import Sequence
from pathlib import Path

from imagepipe.config.settings import Settings
from imagepipe.logging.logger import Log
from imagepipe.processor.exceptions import ImageProcessingError
from imagepipe.processor.models import (
    AUTO_BRIGHTNESS,
    CompressionLevel,
    CompressionOptions,
    EnhancementOptions,
    ProcessedResult,
    ProcessingMode,
    ProcessingOptions,
    RawImage,
)
from imagepipe.processor.processor import build_processor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagepipe",
        description="Validate, enhance and compress a small batch of images.",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="image files to process")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ProcessingMode],
        default=ProcessingMode.COMPRESSION.value,
    )
    parser.add_argument("--level", choices=[level.value for level in CompressionLevel])
    parser.add_argument("--max-dimension", type=int)
    parser.add_argument(
        "--brightness",
        help=f"signed offset, or '{AUTO_BRIGHTNESS}' to pick one from the image",
    )
    parser.add_argument("--contrast", type=float)
    parser.add_argument("--saturation", type=float)
    parser.add_argument("--no-texture", action="store_true")
    parser.add_argument("--no-sharpening", action="store_true")
    parser.add_argument("--max-file-size-mb", type=float)
    parser.add_argument("--max-image-count", type=int)
    parser.add_argument("--output-dir", type=Path, default=Path("processed"))
    return parser


def options_from_args(args: argparse.Namespace) -> ProcessingOptions:
    brightness: float | str | None = args.brightness
    if brightness is not None and brightness != AUTO_BRIGHTNESS:
        brightness = float(brightness)
    return ProcessingOptions(
        mode=args.mode,
        enhancement=EnhancementOptions(
            brightness=brightness,
            contrast=args.contrast,
            saturation=args.saturation,
            texture=False if args.no_texture else None,
            sharpening=False if args.no_sharpening else None,
        ),
        compression=CompressionOptions(level=args.level, max_dimension=args.max_dimension),
        max_file_size_mb=args.max_file_size_mb,
        max_image_count=args.max_image_count,
    )


def load_image(path: Path) -> RawImage:
    """Read a file and guess its MIME type from the extension."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return RawImage(
        data=path.read_bytes(),
        mime_type=mime_type or "application/octet-stream",
        name=path.name,
    )


def write_result(
    result: ProcessedResult, output_dir: Path, taken: set[str] | None = None
) -> Path:
    """Write one result; repeated names in ``taken`` get a ``-N`` suffix."""
    output_dir.mkdir(parents=True, exist_ok=True)
    name = result.name
    if taken is not None:
        stem, suffix = Path(name).stem, Path(name).suffix
        counter = 1
        while name in taken:
            name = f"{stem}-{counter}{suffix}"
            counter += 1
        taken.add(name)
    target = output_dir / name
    target.write_bytes(result.data)
    return target


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build processor -> process files -> write outputs."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    processor = build_processor(settings)
    try:
        images = [load_image(path) for path in args.paths]
        results = processor.process_batch(images, options_from_args(args))
        taken: set[str] = set()
        targets = [write_result(result, args.output_dir, taken) for result in results]
    except (ImageProcessingError, OSError, ValueError) as exc:
        Log.error(f"Processing failed: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for target, result in zip(targets, results):
        print(f"{target} {result.width}x{result.height}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
