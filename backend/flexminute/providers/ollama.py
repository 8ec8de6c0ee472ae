"""Ollama provider.

Calls a local Ollama server (default http://localhost:11434) through its chat
endpoint with JSON output mode.  Handy for iterating on prompts without
spending API credits.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx

from ..errors import ProviderError
from .base import LLMProvider


class OllamaProvider(LLMProvider):
    def __init__(self, model: str, base_url: str = "http://localhost:11434", transport: httpx.BaseTransport | None = None):
        self.name = "ollama"
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def complete(self, prompt: str, *, system: str, temperature: float, json_output: bool = True) -> str:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "options": {"temperature": temperature},
        }
        if json_output:
            payload["format"] = "json"

        url = f"{self.base_url}/api/chat"
        try:
            with httpx.Client(timeout=120.0, transport=self._transport) as client:
                resp = client.post(url, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderError(f"Ollama request failed: {exc}") from exc

        # Ollama returns {message: {role, content}, ...}
        message = data.get("message") if isinstance(data, dict) else None
        if not isinstance(message, dict):
            raise ProviderError("Ollama reply has no message object")
        return (message.get("content") or "").strip()
