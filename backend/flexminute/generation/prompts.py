"""Prompt text for the episode writer and the one-shot repair call."""

from __future__ import annotations

from typing import Iterable

from .banks import CTA, SHOW_NAME, SPEAKERS
from .spec import EPISODE_FIELDS, ComplianceViolation, Selection, ShowFormat

SYSTEM_PROMPT = (
    "You write tight, high-converting short-form scripts that sound human, punchy, and practical."
)

REPAIR_SYSTEM_PROMPT = (
    "You fix JSON episode scripts so they follow every formatting rule exactly. "
    "Return only the corrected JSON object."
)

_SCHEMA = "{\n" + ",\n".join(f'  "{name}": string' for name in EPISODE_FIELDS) + "\n}"


def _speaker_rules(show: ShowFormat) -> str:
    labels = " and ".join(SPEAKERS)
    lines = [f"- Two speakers in podcast style: {labels}."]
    for label in SPEAKERS:
        lines.append(f"- {label} tone: {show.speaker_tones.get(label, '')}.")
    lines.append(f'- Every spoken line starts with the speaker label, e.g. "{SPEAKERS[0]}: ...".')
    return "\n".join(lines)


def build_prompt(selection: Selection, show: ShowFormat, extra_instructions: str = "") -> str:
    """Render the instruction document for one day's episode."""
    emojis = " ".join(selection.emoji_combo)
    prompt = f"""
You are writing a single 60-second episode for a daily micro show.

SHOW ID:
date_key: {selection.date_key}

SHOW NAME:
"{SHOW_NAME}"

FORMAT:
{_speaker_rules(show)}
- Must include a clear Aha! moment that everyday people usually don't know.

TOPIC FOR TODAY:
{selection.topic}

SPIN FOR VARIETY (follow it):
{selection.spin}

NON-REPETITION RULES (IMPORTANT):
- Must feel like a fresh episode with a fresh angle.
- Avoid generic filler intros like "today we’re talking about..." unless it’s genuinely punchy and unique.
- Do not reuse exact phrasing from yesterday (assume yesterday was roughly about: {selection.yesterday_topic}).

FRAMING RULES:
- Use at most ONE strong line like: "The credit industry profits from confusion."
- And ONE moderate line like: "The system isn't designed for you."
- No shaming. No fearmongering. No legal advice. No “hire me” vibes.
- Clear, practical explanation + 1–2 actionable steps someone can do today.
- Keep it tight: ~140–170 spoken words.

TITLE RULES (IMPORTANT):
- The "title" must start exactly with: "{SHOW_NAME}"
- Then append 3 relevant emojis at the end. Today's palette to draw from: {emojis}
- Do not repeat the same emoji twice.

TRANSITION RULE (IMPORTANT):
- Immediately before the CTA, include one short, empowering sentence that reinforces clarity, control, or confidence.
- It should feel like an earned emotional shift, not a sales bridge.

CTA RULES (IMPORTANT):
- DO NOT include any link in the script, hook, or CTA.
- CTA must be a statement, not a question.
- The last line of the script must be one speaker saying exactly:
  "{CTA}"
- Never mention a link unless the viewer comments FIX (so: no link text, no URL).

OUTPUT:
Return ONLY valid JSON with these keys:
{_SCHEMA}

{extra_instructions}
"""
    return prompt.strip()


def build_repair_prompt(
    raw_output: str,
    violations: Iterable[ComplianceViolation],
    selection: Selection,
) -> str:
    """Ask for a corrected copy of ``raw_output`` that fixes ``violations``."""
    problems = "\n".join(f"- {v.detail}" for v in violations)
    labels = " or ".join(SPEAKERS)
    prompt = f"""
The JSON below is an episode of "{SHOW_NAME}" about: {selection.topic}
It breaks these rules:
{problems}

Rules it must follow:
- "script" is a dialogue; every line starts with {labels} followed by a colon, and both speakers talk.
- "hook" and "aha_moment" are non-empty.
- The final line of "script" is exactly: {SPEAKERS[0]}: {CTA}
  ({labels} may say it.)
- No links or URLs anywhere.

Keep everything else as close to the original as possible.

ORIGINAL JSON:
{raw_output}

Return ONLY the corrected JSON object with these keys:
{_SCHEMA}
"""
    return prompt.strip()
