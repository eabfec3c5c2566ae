import pytest
from pydantic import ValidationError

from alchemist.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_ai_provider(self) -> None:
        s = Settings()
        assert s.ai_provider == "gemini"

    def test_default_gemini_model(self) -> None:
        s = Settings()
        assert s.gemini_model_name == "gemini-2.5-flash"

    def test_default_translation_concurrency_is_unlimited(self) -> None:
        s = Settings()
        assert s.translation_max_concurrency == 0


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_ai_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_PROVIDER", "openai")
        s = Settings()
        assert s.ai_provider == "openai"

    def test_loads_gemini_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "secret-key")
        s = Settings()
        assert s.gemini_api_key == "secret-key"

    def test_loads_translation_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRANSLATION_MAX_CONCURRENCY", "4")
        s = Settings()
        assert s.translation_max_concurrency == 4


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_temperature_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_TEMPERATURE", "warm")
        with pytest.raises(ValidationError):
            Settings()
