from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from imagepipe.processor.models import DEFAULT_SUPPORTED_FORMATS


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_file_size_mb: float = Field(default=5, gt=0)
    max_image_count: int = Field(default=1, gt=0)
    supported_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_FORMATS), min_length=1
    )

    codec_engine: str = "pillow"
    max_workers: int = Field(default=4, gt=0)
