"""
Unit tests for backend/jeopardy/core/config.py
Tests: Settings defaults, field validators (CORS parsing, provider, temperature),
active_model resolution
No network required.
"""

import sys
import os
import pytest

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "backend"))
sys.path.insert(0, BACKEND_DIR)

os.environ.setdefault("GROQ_CLOUD_API_KEY", "gsk_test_key_for_unit_tests_only")

from pydantic import ValidationError

from jeopardy.core.config import settings, Settings, get_settings


class TmpSettings(Settings):
    model_config = {"env_file": None, "extra": "ignore"}


class TestSettingsDefaults:
    """Verify field defaults (independent of the test environment)."""

    def _default(self, name):
        return Settings.model_fields[name].default

    def test_settings_is_settings_instance(self):
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_port_default(self):
        assert self._default("PORT") == 5000

    def test_provider_default_is_groq(self):
        assert self._default("LLM_PROVIDER") == "GROQ"

    def test_groq_model_default(self):
        assert self._default("GROQ_MODEL") == "llama-3.3-70b-versatile"

    def test_temperature_default(self):
        assert self._default("LLM_TEMPERATURE") == 0.7

    def test_max_tokens_default(self):
        assert self._default("LLM_MAX_TOKENS") == 1500

    def test_strict_schema_default(self):
        assert self._default("STRICT_SCHEMA") is True

    def test_per_category_sequential_by_default(self):
        assert self._default("PER_CATEGORY_CONCURRENT") is False

    def test_no_timeout_by_default(self):
        assert self._default("LLM_TIMEOUT") is None

    def test_environment_is_valid(self):
        assert settings.ENVIRONMENT in ("development", "staging", "production")


class TestCorsValidator:
    """Test the comma-separated CORS_ORIGINS validator."""

    def test_list_input_preserved(self):
        tmp = TmpSettings(CORS_ORIGINS=["http://localhost:3000", "http://localhost:5173"])
        assert tmp.CORS_ORIGINS == ["http://localhost:3000", "http://localhost:5173"]

    def test_string_input_split(self):
        tmp = TmpSettings(CORS_ORIGINS="http://a.com, http://b.com,")
        assert tmp.CORS_ORIGINS == ["http://a.com", "http://b.com"]

    def test_comma_separated_env_var(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.com,http://b.com")
        assert TmpSettings().CORS_ORIGINS == ["http://a.com", "http://b.com"]

    def test_json_array_env_var(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["http://a.com", "http://b.com"]')
        assert TmpSettings().CORS_ORIGINS == ["http://a.com", "http://b.com"]

    def test_empty_json_array_env_var(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "[]")
        assert TmpSettings().CORS_ORIGINS == []


class TestProviderValidator:

    def test_provider_uppercased(self):
        assert TmpSettings(LLM_PROVIDER="google").LLM_PROVIDER == "GOOGLE"

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            TmpSettings(LLM_PROVIDER="openai-ish")

    @pytest.mark.parametrize("provider,field", [
        ("GROQ", "GROQ_MODEL"),
        ("GOOGLE", "GOOGLE_MODEL"),
        ("OLLAMA", "OLLAMA_MODEL"),
        ("NVIDIA", "NVIDIA_MODEL"),
    ])
    def test_active_model_follows_provider(self, provider, field):
        tmp = TmpSettings(LLM_PROVIDER=provider)
        assert tmp.active_model == getattr(tmp, field)

    def test_missing_key_only_warns(self, caplog):
        with caplog.at_level("WARNING", logger="config"):
            tmp = TmpSettings(LLM_PROVIDER="GOOGLE", GOOGLE_API_KEY="")
        assert tmp.LLM_PROVIDER == "GOOGLE"
        assert "GOOGLE_API_KEY is empty" in caplog.text


class TestTemperatureValidator:

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            TmpSettings(LLM_TEMPERATURE=3.5)

    def test_zero_allowed(self):
        assert TmpSettings(LLM_TEMPERATURE=0).LLM_TEMPERATURE == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
