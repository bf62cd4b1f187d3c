import pytest
from pydantic import ValidationError

from docintel.config.settings import Settings


def _settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        assert _settings().app_env == "dev"

    def test_default_db_port(self) -> None:
        assert _settings().db_port == 5432

    def test_default_pdf_engine(self) -> None:
        assert _settings().pdf_engine == "pdfplumber"

    def test_default_summary_limits(self) -> None:
        s = _settings()
        assert (s.summary_max_chars, s.summary_chunk_overlap, s.summary_max_depth) == (8000, 500, 5)
        assert s.summary_min_chars == 100
        assert s.max_snippet_chars == 3000

    def test_default_provider_orders(self) -> None:
        s = _settings()
        assert s.extraction_provider_order == ["bytez", "gemini", "openai"]
        assert s.summary_provider_order == ["apyhub", "llm"]


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert _settings().log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        assert _settings().db_host == "db.example.com"

    def test_provider_order_is_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_PROVIDERS", " Gemini, ,OPENAI ")
        assert _settings().extraction_provider_order == ["gemini", "openai"]


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            _settings()

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValidationError):
            _settings()
