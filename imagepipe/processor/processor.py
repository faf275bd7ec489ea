from collections.abc import Sequence

from imagepipe.codec.base import BaseImageCodec, to_data_uri
from imagepipe.codec.factory import CodecFactory
from imagepipe.config.settings import Settings
from imagepipe.imaging.compression import CompressionEngine
from imagepipe.imaging.enhancement import EnhancementEngine
from imagepipe.logging.logger import Log
from imagepipe.processor.exceptions import InvalidModeError
from imagepipe.processor.models import (
    ProcessedResult,
    ProcessingMode,
    ProcessingOptions,
    ProcessorConfig,
    RawImage,
)
from imagepipe.processor.options import (
    resolve_compression,
    resolve_enhancement,
    resolve_limits,
)
from imagepipe.processor.pipeline import Pipeline
from imagepipe.processor.steps import CompressStep, DecodeStep, EncodeStep, EnhanceStep
from imagepipe.processor.validator import validate_batch
from imagepipe.worker.batch_runner import BatchRunner


class ImageProcessor:
    """Validates batches and routes each image through its processing mode.

    Modes: direct -> pass-through, enhancement -> decode/enhance/encode,
    compression -> decode/resample/encode, both -> enhancement then compression
    of the enhanced bytes.
    """

    DEFAULT_MODE = ProcessingMode.COMPRESSION

    def __init__(
        self,
        codec: BaseImageCodec,
        config: ProcessorConfig | None = None,
        batch_runner: BatchRunner | None = None,
        enhancement_engine: EnhancementEngine | None = None,
        compression_engine: CompressionEngine | None = None,
    ) -> None:
        self._codec = codec
        self._config = config if config is not None else ProcessorConfig()
        self._batch_runner = batch_runner if batch_runner is not None else BatchRunner()
        self._enhancement_engine = enhancement_engine or EnhancementEngine()
        self._compression_engine = compression_engine or CompressionEngine()

    @property
    def config(self) -> ProcessorConfig:
        return self._config

    @property
    def codec(self) -> BaseImageCodec:
        return self._codec

    def process_batch(
        self,
        images: Sequence[RawImage],
        options: ProcessingOptions | None = None,
    ) -> list[ProcessedResult]:
        """Validate the batch, then process every image.

        Raises:
            ValidationError: before any decoding, on the first limit violation.
            ImageProcessingError: the first per-image failure; the batch is aborted.
        """
        options = options or ProcessingOptions()
        limits = resolve_limits(self._config, options)
        validate_batch(images, limits)
        Log.info(f"Processing batch of {len(images)} image(s)")
        results = self._batch_runner.run(images, lambda image: self.process_one(image, options))
        Log.info(f"Processed batch of {len(results)} image(s)")
        return results

    def process_one(
        self,
        image: RawImage,
        options: ProcessingOptions | None = None,
    ) -> ProcessedResult:
        """Process a single image according to ``options.mode``.

        Raises:
            InvalidModeError: if the mode is not recognized.
            DecodeFailedError, EncodeFailedError: from the codec.
        """
        options = options or ProcessingOptions()
        mode = self._resolve_mode(options.mode)
        Log.info(f"Processing '{image.name}' ({image.mime_type}) in {mode.value} mode")

        if mode is ProcessingMode.DIRECT:
            return self._process_direct(image)
        if mode is ProcessingMode.ENHANCEMENT:
            return self._enhancement_pipeline(options).run(image)
        if mode is ProcessingMode.COMPRESSION:
            return self._compression_pipeline(options).run(image)
        return self._process_both(image, options)

    def _resolve_mode(self, mode: ProcessingMode | str | None) -> ProcessingMode:
        if mode is None:
            return self.DEFAULT_MODE
        try:
            return ProcessingMode(mode)
        except ValueError:
            raise InvalidModeError(f"Invalid processing mode: {mode}") from None

    def _process_direct(self, image: RawImage) -> ProcessedResult:
        return ProcessedResult(
            data=image.data,
            data_uri=to_data_uri(image.data, image.mime_type),
            width=0,
            height=0,
            mime_type=image.mime_type,
            name=image.name,
        )

    def _process_both(self, image: RawImage, options: ProcessingOptions) -> ProcessedResult:
        enhanced = self._enhancement_pipeline(options).run(image)
        intermediate = RawImage(data=enhanced.data, mime_type=image.mime_type, name=image.name)
        return self._compression_pipeline(options).run(intermediate)

    def _enhancement_pipeline(self, options: ProcessingOptions) -> Pipeline:
        return Pipeline(
            [
                DecodeStep(self._codec),
                EnhanceStep(self._enhancement_engine, resolve_enhancement(options)),
                EncodeStep(self._codec),
            ]
        )

    def _compression_pipeline(self, options: ProcessingOptions) -> Pipeline:
        return Pipeline(
            [
                DecodeStep(self._codec),
                CompressStep(self._compression_engine, resolve_compression(options)),
                EncodeStep(self._codec),
            ]
        )


def build_processor(settings: Settings) -> ImageProcessor:
    """Build an ImageProcessor with the configured codec and worker pool."""
    return ImageProcessor(
        codec=CodecFactory.create(settings),
        config=ProcessorConfig.from_settings(settings),
        batch_runner=BatchRunner(max_workers=settings.max_workers),
    )
