import pytest
from pydantic import ValidationError

from docextract.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pymupdf"

    def test_default_render_dpi_is_ocr_grade(self) -> None:
        s = Settings()
        assert s.pdf_render_dpi >= 150

    def test_default_llm_provider(self) -> None:
        s = Settings()
        assert s.llm_provider == "ollama"

    def test_default_llm_timeout_is_generous(self) -> None:
        s = Settings()
        assert s.llm_ollama_timeout_seconds >= 120
        assert s.llm_openai_timeout_seconds >= 120

    def test_default_ollama_response_fields(self) -> None:
        s = Settings()
        assert s.llm_ollama_response_fields == ["thinking", "response"]


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_ollama_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_OLLAMA_BASE_URL", "http://gpu-box:11434")
        s = Settings()
        assert s.llm_ollama_base_url == "http://gpu-box:11434"

    def test_loads_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_OLLAMA_TIMEOUT_SECONDS", "600")
        s = Settings()
        assert s.llm_ollama_timeout_seconds == 600

    def test_loads_response_fields_as_json_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_OLLAMA_RESPONSE_FIELDS", '["response", "thinking"]')
        s = Settings()
        assert s.llm_ollama_response_fields == ["response", "thinking"]


class TestSettingsValidation:
    def test_invalid_dpi_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_RENDER_DPI", "high")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_OLLAMA_TIMEOUT_SECONDS", "abc")
        with pytest.raises(ValidationError):
            Settings()
