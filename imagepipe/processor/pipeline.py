from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from imagepipe.imaging.buffer import PixelBuffer
from imagepipe.logging.logger import Log
from imagepipe.processor.models import EncodedImage, ProcessedResult, RawImage


@dataclass(slots=True)
class PipelineContext:
    """State of one image as it moves decode -> transform -> encode."""

    image: RawImage
    buffer: PixelBuffer | None = None
    quality: float | None = None
    encoded: EncodedImage | None = None

    def to_result(self) -> ProcessedResult:
        if self.encoded is None or self.buffer is None:
            raise ValueError("PipelineContext must be decoded and encoded before building a result")
        return ProcessedResult(
            data=self.encoded.data,
            data_uri=self.encoded.data_uri,
            width=self.buffer.width,
            height=self.buffer.height,
            mime_type=self.image.mime_type,
            name=self.image.name,
        )


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


class Pipeline:
    """Runs steps strictly in sequence over a single image."""

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    @property
    def steps(self) -> list[PipelineStep]:
        return list(self._steps)

    def run(self, image: RawImage) -> ProcessedResult:
        context = PipelineContext(image=image)
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"{type(step).__name__} failed for '{image.name}': {exc}")
                raise
        return context.to_result()
