"""Pydantic models for the daily episode.

``Selection`` is the deterministic input for one day, ``Episode`` is what the
endpoint returns.  Providers are expected to return JSON compatible with
``Episode``; anything that doesn't validate is handled by the pipeline.
"""

from __future__ import annotations

from typing import Dict, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .banks import DEFAULT_SPEAKER_TONES

EPISODE_FIELDS = ("title", "hook", "script", "aha_moment", "cta", "topic")


class Selection(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_key: str
    topic: str
    spin: str
    emoji_combo: Tuple[str, ...]
    # Advisory only: lets the prompt steer away from yesterday's angle.
    yesterday_topic: str


class Episode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    hook: str
    script: str
    aha_moment: str
    cta: str
    topic: str


class ComplianceViolation(BaseModel):
    code: Literal["missing_speaker", "empty_hook", "empty_aha_moment", "cta_not_final"]
    detail: str


class ShowFormat(BaseModel):
    """Speaker setup for the two-voice format.

    Which speaker carries which tone has flipped between seasons, so it is
    configuration rather than a constant.
    """

    model_config = ConfigDict(frozen=True)

    speaker_tones: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SPEAKER_TONES))
    closing_speaker: Literal["HOST", "EXPERT"] = "HOST"
