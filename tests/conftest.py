"""Shared test fixtures for the Credit-Flex Minute test suite."""

import json
from collections.abc import Generator
from typing import Any

import pytest

from flexminute.config import get_settings
from flexminute.generation.banks import CTA, SHOW_NAME
from flexminute.providers.base import LLMProvider


class ScriptedProvider(LLMProvider):
    """Provider stub that replays queued replies.

    Each entry is either a string (returned) or an exception (raised).  The
    last entry repeats once the queue runs out.
    """

    def __init__(self, *replies: Any):
        self.name = "scripted"
        self.model = "scripted-v1"
        self._replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    def complete(self, prompt: str, *, system: str, temperature: float, json_output: bool = True) -> str:
        self.calls.append({
            "prompt": prompt,
            "system": system,
            "temperature": temperature,
            "json_output": json_output,
        })
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


def compliant_script(closing: str = "HOST") -> str:
    return "\n".join([
        "HOST: Paying off a card can drop your score. Sounds backwards, right?",
        "EXPERT: Because closing it shrinks your available credit!",
        "HOST: Keep it open, keep it at zero, let it report.",
        "EXPERT: Clarity changes how you play the game.",
        f"{closing}: {CTA}",
    ])


def episode_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "title": f"{SHOW_NAME}: the payoff paradox 💳📉🧠",
        "hook": "You paid it off and your score dropped.",
        "script": compliant_script(),
        "aha_moment": "Closing a paid-off card shrinks your available credit.",
        "cta": CTA,
        "topic": "Why paying off a card can drop your score",
    }
    payload.update(overrides)
    return payload


def episode_json(**overrides: Any) -> str:
    return json.dumps(episode_payload(**overrides), ensure_ascii=False)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment for the offline mock provider."""
    monkeypatch.setenv("GEN_PROVIDER", "mock")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("CREDFLEX_INSTRUCTIONS", raising=False)
    monkeypatch.delenv("CLOSING_SPEAKER", raising=False)
