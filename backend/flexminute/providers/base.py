"""Provider interface for episode generation."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    name: str
    model: str

    @abstractmethod
    def complete(self, prompt: str, *, system: str, temperature: float, json_output: bool = True) -> str:
        """Return the model's reply to ``prompt``.

        With ``json_output`` the reply is expected to be one JSON object;
        otherwise it is free text.

        Implementations raise ``ProviderError`` for transport or service
        failures and never retry; the pipeline decides what a failure means.
        """
        raise NotImplementedError
