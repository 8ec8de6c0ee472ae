"""Tests for environment-driven settings."""

import pytest

from flexminute.config import Settings, get_settings, load_settings, validate_settings
from flexminute.errors import ConfigurationError
from flexminute.generation.banks import DEFAULT_SPEAKER_TONES


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["GEN_PROVIDER", "OPENAI_MODEL", "GEN_TEMPERATURE", "HOST_TONE", "CLOSING_SPEAKER"]:
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.provider == "openai"
    assert settings.openai_model == "gpt-4.1-mini"
    assert settings.temperature == 0.9
    assert settings.host_tone == DEFAULT_SPEAKER_TONES["HOST"]
    assert settings.closing_speaker == "HOST"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEN_PROVIDER", " Ollama ")
    monkeypatch.setenv("OLLAMA_MODEL", "mistral")
    monkeypatch.setenv("GEN_TEMPERATURE", "0.5")
    monkeypatch.setenv("CREDFLEX_INSTRUCTIONS", "Keep it under 60 seconds.")
    monkeypatch.setenv("CLOSING_SPEAKER", "expert")
    monkeypatch.setenv("DAILY_CRON_HOUR", "6")
    monkeypatch.setenv("CREDFLEX_MODEL", "gpt-4.1")
    settings = load_settings()
    assert settings.provider == "ollama"
    assert settings.ollama_model == "mistral"
    assert settings.temperature == 0.5
    assert settings.extra_instructions == "Keep it under 60 seconds."
    assert settings.closing_speaker == "EXPERT"
    assert settings.daily_cron_hour == 6
    assert settings.relay_model == "gpt-4.1"


def test_blank_api_key_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "")
    assert load_settings().openai_api_key is None


def test_get_settings_is_cached(mock_env: None) -> None:
    assert get_settings() is get_settings()


def test_show_format() -> None:
    show = Settings(host_tone="warm", expert_tone="loud", closing_speaker="expert").show_format()
    assert show.speaker_tones == {"HOST": "warm", "EXPERT": "loud"}
    assert show.closing_speaker == "EXPERT"


class TestValidateSettings:
    def test_mock_needs_nothing(self) -> None:
        validate_settings(Settings(provider="mock"))

    def test_openai_with_key(self) -> None:
        validate_settings(Settings(provider="openai", openai_api_key="sk-test"))

    def test_openai_without_key(self) -> None:
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            validate_settings(Settings(provider="openai"))

    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="GEN_PROVIDER"):
            validate_settings(Settings(provider="palm"))

    def test_unknown_closing_speaker(self) -> None:
        with pytest.raises(ConfigurationError, match="CLOSING_SPEAKER"):
            validate_settings(Settings(provider="mock", closing_speaker="GUEST"))
