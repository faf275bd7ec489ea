from imagepipe.codec.base import BaseImageCodec
from imagepipe.codec.opencv_adapter import OpenCvCodec
from imagepipe.codec.pillow_adapter import PillowCodec
from imagepipe.config.settings import Settings


class CodecFactory:
    """Creates the correct image codec based on settings."""

    ADAPTERS: dict[str, type[BaseImageCodec]] = {
        "pillow": PillowCodec,
        "opencv": OpenCvCodec,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseImageCodec:
        engine = settings.codec_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown codec engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
