"""Guardrails applied to whatever the generation service returns.

Model output is untrusted.  Everything here is deterministic and idempotent:
running a finished episode through it again changes nothing.
"""

from __future__ import annotations

import json
import re
from typing import List

from pydantic import ValidationError

from ..errors import MalformedOutputError
from .banks import CTA, SHOW_NAME, SPEAKERS, TITLE_EMOJI_COUNT, TITLE_FALLBACK_EMOJIS
from .selector import fnv1a_32
from .spec import ComplianceViolation, Episode

_URL_RE = re.compile(r"\b[a-z][a-z0-9+.\-]*://\S+", re.IGNORECASE)
_WWW_RE = re.compile(r"\bwww\.\S+", re.IGNORECASE)
_HSPACE_RE = re.compile(r"[ \t]{2,}")
_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\s*```$")

# Pictographic code points.  Skin tones are excluded here and stripped as
# modifiers instead, so they never count as one of the title's emojis.  From
# the technical and arrow blocks only the emoji-presentation characters count;
# symbols like the command key (U+2318) stay in the title text.
_EMOJI_RE = re.compile(
    "["
    "\U0001F000-\U0001F3FA"
    "\U0001F400-\U0001FAFF"
    "\u231A\u231B\u23E9-\u23EC\u23F0\u23F3"
    "\u2600-\u27BF"
    "\u2B1B\u2B1C\u2B50\u2B55"
    "]"
)
_EMOJI_MODIFIER_RE = re.compile("[\u200d\u20e3\ufe0e\ufe0f\U0001F3FB-\U0001F3FF]")

_LABELS = "|".join(SPEAKERS)
_SPEAKER_LINE_RE = {
    label: re.compile(rf"^[ \t]*{label}[ \t]*:", re.IGNORECASE | re.MULTILINE)
    for label in SPEAKERS
}
_CLOSING_LINE_RE = re.compile(rf"(?i:{_LABELS})[ \t]*:[ \t]*{re.escape(CTA)}")
_APOSTROPHE_RE = re.compile("[\u2018\u2019\u02bc`]")


def parse_episode(raw: str) -> Episode:
    """Parse model output into an ``Episode``.

    Raises:
        MalformedOutputError: not JSON, not an object, or a required field
            is missing or not a string.
    """
    text = _FENCE_OPEN_RE.sub("", (raw or "").strip())
    text = _FENCE_CLOSE_RE.sub("", text)
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(f"not JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise MalformedOutputError("not JSON: nested too deeply") from exc
    if not isinstance(obj, dict):
        raise MalformedOutputError(f"expected a JSON object, got {type(obj).__name__}")
    try:
        return Episode.model_validate(obj)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise MalformedOutputError(f"invalid fields: {fields}") from exc


def fallback_episode(raw: str, topic: str) -> Episode:
    """Placeholder episode carrying the raw model text as the script."""
    return Episode(
        title=f"{SHOW_NAME} 💳",
        hook="",
        script=raw or "",
        aha_moment="",
        cta=CTA,
        topic=topic,
    )


def scrub_links(text: str) -> str:
    if not text:
        return ""
    cleaned = _URL_RE.sub("", text)
    cleaned = _WWW_RE.sub("", cleaned)
    cleaned = _HSPACE_RE.sub(" ", cleaned)
    return cleaned.strip()


def sanitize_episode(episode: Episode, *, topic: str) -> Episode:
    """Strip links and pin the fields the model is never trusted with."""
    return episode.model_copy(update={
        "title": scrub_links(episode.title),
        "hook": scrub_links(episode.hook),
        "script": scrub_links(episode.script),
        "aha_moment": scrub_links(episode.aha_moment),
        "cta": CTA,
        "topic": topic,
    })


def _dedupe(items: List[str]) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def _with_prefix(body: str) -> str:
    if body.startswith(SHOW_NAME):
        return body
    if body.lower().startswith(SHOW_NAME.lower()):
        return SHOW_NAME + body[len(SHOW_NAME):]
    return f"{SHOW_NAME}: {body}" if body else SHOW_NAME


def normalize_title(title: str) -> str:
    """Show-name prefix, then exactly three distinct emojis.

    Emojis already in the title are kept in order of first appearance.  If
    there are fewer than three, the rest come from a fixed list starting at
    an offset hashed from the title text, so padding is reproducible.
    """
    emojis = _dedupe(_EMOJI_RE.findall(title or ""))
    body = _EMOJI_MODIFIER_RE.sub("", _EMOJI_RE.sub("", title or ""))
    body = _with_prefix(" ".join(body.split()))

    if len(emojis) < TITLE_EMOJI_COUNT:
        start = fnv1a_32(body) % len(TITLE_FALLBACK_EMOJIS)
        for offset in range(len(TITLE_FALLBACK_EMOJIS)):
            if len(emojis) >= TITLE_EMOJI_COUNT:
                break
            candidate = TITLE_FALLBACK_EMOJIS[(start + offset) % len(TITLE_FALLBACK_EMOJIS)]
            if candidate not in emojis:
                emojis.append(candidate)

    return f"{body} {''.join(emojis[:TITLE_EMOJI_COUNT])}"


def postprocess_episode(episode: Episode, *, topic: str) -> Episode:
    sanitized = sanitize_episode(episode, topic=topic)
    return sanitized.model_copy(update={"title": normalize_title(sanitized.title)})


def _last_line(script: str) -> str:
    lines = [line.strip() for line in script.splitlines() if line.strip()]
    return lines[-1] if lines else ""


def validate_episode(episode: Episode) -> List[ComplianceViolation]:
    """Structural checks on a sanitized episode; empty list means compliant."""
    violations: List[ComplianceViolation] = []
    for label, pattern in _SPEAKER_LINE_RE.items():
        if not pattern.search(episode.script):
            violations.append(ComplianceViolation(
                code="missing_speaker",
                detail=f'"script" has no line starting with "{label}:"',
            ))
    if not episode.hook.strip():
        violations.append(ComplianceViolation(code="empty_hook", detail='"hook" is empty'))
    if not episode.aha_moment.strip():
        violations.append(ComplianceViolation(code="empty_aha_moment", detail='"aha_moment" is empty'))
    if not _CLOSING_LINE_RE.fullmatch(_last_line(episode.script)):
        violations.append(ComplianceViolation(
            code="cta_not_final",
            detail=f'the last line of "script" is not "<{" or ".join(SPEAKERS)}>: {CTA}"',
        ))
    return violations


def _fold(text: str) -> str:
    """Lower-cased with straight apostrophes, for spotting a retyped CTA."""
    return " ".join(_APOSTROPHE_RE.sub("'", text).split()).casefold()


def force_compliance(episode: Episode, *, closing_speaker: str) -> Episode:
    """Make the script end with the CTA line, without asking the model again.

    A trailing line that already carries the CTA text (unlabelled, or under
    some other label) is replaced rather than duplicated.  Hook and aha
    moment are left as they are.
    """
    lines = episode.script.rstrip().splitlines()
    if lines and _CLOSING_LINE_RE.fullmatch(lines[-1].strip()):
        return episode
    if lines and _fold(CTA) in _fold(lines[-1]):
        lines.pop()
    lines.append(f"{closing_speaker}: {CTA}")
    return episode.model_copy(update={"script": "\n".join(lines)})
