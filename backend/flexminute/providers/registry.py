"""Provider registry.

Select providers via the GEN_PROVIDER setting, or explicitly by name.
"""

from __future__ import annotations

from typing import Optional

from ..config import Settings, get_settings
from ..errors import ConfigurationError
from .base import LLMProvider
from .mock import MockProvider
from .ollama import OllamaProvider
from .openai_chat import OpenAIProvider


def get_llm_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> LLMProvider:
    settings = settings or get_settings()
    name = (provider_name or settings.provider).lower()

    if name == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is required when GEN_PROVIDER=openai")
        return OpenAIProvider(model=model or settings.openai_model, api_key=settings.openai_api_key)

    if name == "ollama":
        return OllamaProvider(model=model or settings.ollama_model, base_url=settings.ollama_base_url)

    if name == "mock":
        return MockProvider(model=model or "mock-v1")

    raise ConfigurationError(f"Unknown generation provider: {name}")
