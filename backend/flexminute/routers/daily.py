"""
Daily episode routes.

``/api/daily`` answers GET and POST with today's episode.  The request body
is ignored; the date (UTC) and the environment decide everything.  Other
verbs get a JSON 405 from the handler registered in ``main``.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..errors import GenerationError
from ..generation.pipeline import episode_for_date
from ..generation.selector import select, today_key
from ..providers.base import LLMProvider
from ..providers.registry import get_llm_provider

router = APIRouter()


class PrettyJSONResponse(JSONResponse):
    """Indented JSON; the endpoint is often opened straight in a browser."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def get_provider(settings: Settings = Depends(get_settings)) -> LLMProvider:
    return get_llm_provider(settings=settings)


def get_date_key() -> str:
    return today_key()


@router.api_route("/daily", methods=["GET", "POST"], response_class=PrettyJSONResponse)
def daily_episode(
    provider: LLMProvider = Depends(get_provider),
    settings: Settings = Depends(get_settings),
    date_key: str = Depends(get_date_key),
):
    """Generate today's episode."""
    try:
        episode = episode_for_date(
            provider,
            date_key,
            show=settings.show_format(),
            extra_instructions=settings.extra_instructions,
            temperature=settings.temperature,
        )
    except GenerationError as exc:
        return PrettyJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error", "message": str(exc)},
        )
    return PrettyJSONResponse(content=episode.model_dump())


@router.get("/daily/selection", response_class=PrettyJSONResponse)
def daily_selection(date_key: str = Depends(get_date_key)):
    """Today's topic, spin and emojis, without calling the generation service."""
    return PrettyJSONResponse(content=select(date_key).model_dump(mode="json"))
