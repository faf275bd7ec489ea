from imagepipe.codec.base import BaseImageCodec
from imagepipe.imaging.compression import CompressionEngine
from imagepipe.imaging.enhancement import EnhancementEngine
from imagepipe.logging.logger import Log
from imagepipe.processor.models import CompressionOptions, EnhancementOptions
from imagepipe.processor.pipeline import PipelineContext, PipelineStep


class DecodeStep(PipelineStep):
    def __init__(self, codec: BaseImageCodec) -> None:
        self._codec = codec

    def run(self, context: PipelineContext) -> PipelineContext:
        context.buffer = self._codec.decode(context.image.data, context.image.mime_type)
        Log.debug(
            f"Decoded '{context.image.name}' ({context.image.size_bytes} bytes) to "
            f"{context.buffer.width}x{context.buffer.height}"
        )
        return context


class EnhanceStep(PipelineStep):
    def __init__(self, engine: EnhancementEngine, options: EnhancementOptions) -> None:
        self._engine = engine
        self._options = options

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.buffer is None:
            raise ValueError("PipelineContext.buffer must be set before enhancement")
        context.buffer = self._engine.enhance(context.buffer, self._options)
        return context


class CompressStep(PipelineStep):
    def __init__(self, engine: CompressionEngine, options: CompressionOptions) -> None:
        self._engine = engine
        self._options = options

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.buffer is None:
            raise ValueError("PipelineContext.buffer must be set before compression")
        context.buffer, context.quality = self._engine.compress(context.buffer, self._options)
        Log.debug(
            f"Compressing '{context.image.name}' at quality {context.quality} to "
            f"{context.buffer.width}x{context.buffer.height}"
        )
        return context


class EncodeStep(PipelineStep):
    def __init__(self, codec: BaseImageCodec) -> None:
        self._codec = codec

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.buffer is None:
            raise ValueError("PipelineContext.buffer must be set before encoding")
        context.encoded = self._codec.encode(
            context.buffer, context.image.mime_type, context.quality
        )
        Log.debug(f"Encoded '{context.image.name}' to {len(context.encoded.data)} bytes")
        return context
