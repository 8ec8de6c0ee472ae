"""Generation pipeline orchestration.

One primary call to the provider, at most one repair call, then
deterministic fixes.  Only a failed primary call is an error; anything the
model gets wrong is absorbed here so the endpoint always answers with the
same six-field shape.
"""

from __future__ import annotations

from typing import Optional

from ..errors import GenerationError, MalformedOutputError, ProviderError
from ..log import get_logger
from ..providers.base import LLMProvider
from .moderation import (
    fallback_episode,
    force_compliance,
    parse_episode,
    postprocess_episode,
    validate_episode,
)
from .prompts import REPAIR_SYSTEM_PROMPT, SYSTEM_PROMPT, build_prompt, build_repair_prompt
from .selector import select
from .spec import Episode, Selection, ShowFormat

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.9
REPAIR_TEMPERATURE = 0.4


def _repair(
    provider: LLMProvider,
    raw: str,
    episode: Episode,
    selection: Selection,
) -> Optional[Episode]:
    """Ask once for a corrected episode; ``None`` if that didn't work out."""
    violations = validate_episode(episode)
    logger.info(
        "repair_requested",
        date_key=selection.date_key,
        violations=[v.code for v in violations],
    )
    prompt = build_repair_prompt(raw, violations, selection)
    try:
        repaired_raw = provider.complete(prompt, system=REPAIR_SYSTEM_PROMPT, temperature=REPAIR_TEMPERATURE)
    except ProviderError as exc:
        logger.warning("repair_failed", date_key=selection.date_key, reason="provider", error=str(exc))
        return None
    try:
        repaired = parse_episode(repaired_raw)
    except MalformedOutputError as exc:
        logger.warning("repair_failed", date_key=selection.date_key, reason="unparseable", error=str(exc))
        return None
    return postprocess_episode(repaired, topic=selection.topic)


def generate_episode(
    provider: LLMProvider,
    selection: Selection,
    *,
    show: Optional[ShowFormat] = None,
    extra_instructions: str = "",
    temperature: float = DEFAULT_TEMPERATURE,
) -> Episode:
    """Generate, sanitize and validate the episode for ``selection``.

    Raises:
        GenerationError: the primary provider call failed.
    """
    show = show or ShowFormat()
    prompt = build_prompt(selection, show, extra_instructions=extra_instructions)

    try:
        raw = provider.complete(prompt, system=SYSTEM_PROMPT, temperature=temperature)
    except ProviderError as exc:
        logger.error("generation_failed", provider=provider.name, model=provider.model, error=str(exc))
        raise GenerationError(str(exc)) from exc

    try:
        episode = parse_episode(raw)
    except MalformedOutputError as exc:
        # Degrade to the raw text; there is no structure worth repairing.
        logger.warning("output_unparseable", date_key=selection.date_key, error=str(exc))
        return postprocess_episode(fallback_episode(raw, selection.topic), topic=selection.topic)

    episode = postprocess_episode(episode, topic=selection.topic)
    if validate_episode(episode):
        repaired = _repair(provider, raw, episode, selection)
        if repaired is not None:
            episode = repaired
        remaining = validate_episode(episode)
        if remaining:
            logger.info(
                "forced_compliance",
                date_key=selection.date_key,
                violations=[v.code for v in remaining],
            )
            episode = force_compliance(episode, closing_speaker=show.closing_speaker)

    logger.info("episode_ready", date_key=selection.date_key, topic=selection.topic, title=episode.title)
    return episode


def episode_for_date(
    provider: LLMProvider,
    date_key: str,
    *,
    show: Optional[ShowFormat] = None,
    extra_instructions: str = "",
    temperature: float = DEFAULT_TEMPERATURE,
) -> Episode:
    """Select the day's content and run the pipeline for it."""
    selection = select(date_key)
    logger.info("selection_made", date_key=date_key, topic=selection.topic, spin=selection.spin)
    return generate_episode(
        provider,
        selection,
        show=show,
        extra_instructions=extra_instructions,
        temperature=temperature,
    )
