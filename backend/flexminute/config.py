"""
Runtime configuration for the Credit-Flex Minute service.

Everything is read from environment variables, the same way the hosting
platform injects them.  Settings are loaded once per process and cached;
call ``get_settings.cache_clear()`` after changing the environment (tests
do this between cases).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .errors import ConfigurationError
from .generation.banks import DEFAULT_SPEAKER_TONES, SPEAKERS
from .generation.spec import ShowFormat

PROVIDERS = ("openai", "ollama", "mock")


@dataclass(frozen=True)
class Settings:
    provider: str = "openai"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    ollama_model: str = "llama3"
    ollama_base_url: str = "http://localhost:11434"
    temperature: float = 0.9
    # Free text appended verbatim to every prompt.
    extra_instructions: str = ""
    # Model for the agent relay; falls back to the provider's model.
    relay_model: Optional[str] = None
    host_tone: str = DEFAULT_SPEAKER_TONES["HOST"]
    expert_tone: str = DEFAULT_SPEAKER_TONES["EXPERT"]
    closing_speaker: str = "HOST"
    log_level: str = "INFO"
    log_format: str = "json"
    daily_cron_hour: int = 11
    daily_cron_minute: int = 0

    def show_format(self) -> ShowFormat:
        return ShowFormat(
            speaker_tones={"HOST": self.host_tone, "EXPERT": self.expert_tone},
            closing_speaker=self.closing_speaker.upper(),
        )


def load_settings() -> Settings:
    """Build a ``Settings`` object from the current environment."""
    e = os.getenv
    return Settings(
        provider=e("GEN_PROVIDER", "openai").strip().lower(),
        openai_api_key=e("OPENAI_API_KEY") or None,
        openai_model=e("OPENAI_MODEL", "gpt-4.1-mini"),
        ollama_model=e("OLLAMA_MODEL", "llama3"),
        ollama_base_url=e("OLLAMA_BASE_URL", "http://localhost:11434"),
        temperature=float(e("GEN_TEMPERATURE", "0.9")),
        extra_instructions=e("CREDFLEX_INSTRUCTIONS", ""),
        relay_model=e("CREDFLEX_MODEL") or None,
        host_tone=e("HOST_TONE", DEFAULT_SPEAKER_TONES["HOST"]),
        expert_tone=e("EXPERT_TONE", DEFAULT_SPEAKER_TONES["EXPERT"]),
        closing_speaker=e("CLOSING_SPEAKER", "HOST").strip().upper(),
        log_level=e("LOG_LEVEL", "INFO"),
        log_format=e("LOG_FORMAT", "json"),
        daily_cron_hour=int(e("DAILY_CRON_HOUR", "11")),
        daily_cron_minute=int(e("DAILY_CRON_MINUTE", "0")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def validate_settings(settings: Settings) -> None:
    """Fail fast on configuration the service cannot run with.

    Raises:
        ConfigurationError: unknown provider, missing OpenAI key, or a
            closing speaker that is not one of the show's labels.
    """
    if settings.provider not in PROVIDERS:
        raise ConfigurationError(
            f"GEN_PROVIDER must be one of {', '.join(PROVIDERS)}, got {settings.provider!r}"
        )
    if settings.provider == "openai" and not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is required when GEN_PROVIDER=openai")
    if settings.closing_speaker not in SPEAKERS:
        raise ConfigurationError(
            f"CLOSING_SPEAKER must be one of {', '.join(SPEAKERS)}, got {settings.closing_speaker!r}"
        )
