"""
Agent relay route.

``POST /api/credflex`` forwards ``input_as_text`` to the configured model,
with ``CREDFLEX_INSTRUCTIONS`` as the system prompt, and returns the reply
as ``output_text``.  Only POST is accepted.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..errors import ProviderError
from ..log import get_logger
from ..providers.base import LLMProvider
from ..providers.registry import get_llm_provider

router = APIRouter()
logger = get_logger(__name__)

DEFAULT_RELAY_INSTRUCTIONS = (
    "You are the CredFlex X agent. Answer credit questions in plain, "
    "practical language. No links, no legal advice."
)


def get_relay_provider(settings: Settings = Depends(get_settings)) -> LLMProvider:
    return get_llm_provider(model=settings.relay_model, settings=settings)


@router.post("/credflex")
def credflex_relay(
    payload: Any = Body(default=None),
    provider: LLMProvider = Depends(get_relay_provider),
    settings: Settings = Depends(get_settings),
):
    """Relay one message to the agent and return its text reply."""
    input_text = payload.get("input_as_text") if isinstance(payload, dict) else None
    if not isinstance(input_text, str) or not input_text.strip():
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Missing input_as_text"})

    try:
        output_text = provider.complete(
            input_text,
            system=settings.extra_instructions or DEFAULT_RELAY_INSTRUCTIONS,
            temperature=settings.temperature,
            json_output=False,
        )
    except ProviderError as exc:
        logger.error("relay_failed", provider=provider.name, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Server error"},
        )

    logger.info("relay_answered", provider=provider.name, chars=len(output_text))
    return {"output_text": output_text}
