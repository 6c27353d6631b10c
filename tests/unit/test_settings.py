import pytest
from pydantic import ValidationError

from docucare.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pymupdf"

    def test_default_ocr_languages(self) -> None:
        s = Settings()
        assert s.ocr_languages == "eng"

    def test_default_transcript_cap(self) -> None:
        s = Settings()
        assert s.max_transcript_chars == 25_000

    def test_default_summarization_provider(self) -> None:
        s = Settings()
        assert s.summarization_provider == "gemini"

    def test_default_generation_config(self) -> None:
        s = Settings()
        assert s.summarization_temperature == 0.2
        assert s.summarization_max_output_tokens == 500
        assert s.summarization_image_quality == 90

    def test_default_db_timeouts(self) -> None:
        s = Settings()
        assert s.db_connect_timeout_seconds == 5
        assert s.db_pool_timeout_seconds == 10.0


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_page_workers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_PAGE_WORKERS", "3")
        s = Settings()
        assert s.max_page_workers == 3

    def test_loads_gemini_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARIZATION_GEMINI_API_KEY", "k-123")
        s = Settings()
        assert s.summarization_gemini_api_key == "k-123"


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_temperature_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARIZATION_TEMPERATURE", "warm")
        with pytest.raises(ValidationError):
            Settings()
