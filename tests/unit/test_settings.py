import pytest
from pydantic import ValidationError

from imagepipe.config.settings import Settings
from imagepipe.processor.models import DEFAULT_SUPPORTED_FORMATS, ProcessorConfig


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_limits(self) -> None:
        s = Settings()
        assert s.max_file_size_mb == 5
        assert s.max_image_count == 1

    def test_default_supported_formats(self) -> None:
        s = Settings()
        assert s.supported_formats == list(DEFAULT_SUPPORTED_FORMATS)

    def test_default_codec_engine(self) -> None:
        s = Settings()
        assert s.codec_engine == "pillow"

    def test_default_max_workers(self) -> None:
        s = Settings()
        assert s.max_workers == 4


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_max_file_size(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE_MB", "2.5")
        s = Settings()
        assert s.max_file_size_mb == 2.5

    def test_loads_supported_formats_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPPORTED_FORMATS", '["image/png", "image/webp"]')
        s = Settings()
        assert s.supported_formats == ["image/png", "image/webp"]

    def test_loads_codec_engine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODEC_ENGINE", "opencv")
        s = Settings()
        assert s.codec_engine == "opencv"


class TestSettingsValidation:
    def test_invalid_image_count_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_IMAGE_COUNT", "abc")
        with pytest.raises(ValidationError):
            Settings()

    def test_zero_file_size_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE_MB", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_empty_formats_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPPORTED_FORMATS", "[]")
        with pytest.raises(ValidationError):
            Settings()


class TestProcessorConfigFromSettings:
    def test_maps_limits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_IMAGE_COUNT", "3")
        monkeypatch.setenv("SUPPORTED_FORMATS", '["image/png"]')
        config = ProcessorConfig.from_settings(Settings())
        assert config.max_image_count == 3
        assert config.supported_formats == ("image/png",)
