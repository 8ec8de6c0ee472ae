"""OpenAI provider.

Uses the chat completions API.  Episode generation sets ``response_format``
to a JSON object, so the reply is a single JSON document; the agent relay
asks for plain text.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError

from ..errors import ProviderError
from .base import LLMProvider


class OpenAIProvider(LLMProvider):
    def __init__(self, model: str, api_key: Optional[str] = None, client: Optional[OpenAI] = None):
        self.name = "openai"
        self.model = model
        self._client = client or OpenAI(api_key=api_key)

    def complete(self, prompt: str, *, system: str, temperature: float, json_output: bool = True) -> str:
        kwargs: Dict[str, Any] = {}
        if json_output:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                **kwargs,
            )
        except OpenAIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}") from exc

        empty = "{}" if json_output else ""
        if not completion.choices:
            return empty
        return completion.choices[0].message.content or empty
