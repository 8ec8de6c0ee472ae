"""Deterministic mock provider.

This is used for local dev and offline-friendly builds.  It reads the topic
back out of the prompt and answers with a compliant episode, seeded from the
prompt text so the same prompt always yields the same reply.  Plain-text
requests get a short echo of the prompt.
"""

from __future__ import annotations

import json
import random
import re

from ..generation.banks import CTA, SHOW_NAME
from .base import LLMProvider

_TOPIC_RE = re.compile(r"TOPIC FOR TODAY:\n(.+)")
_REPAIR_TOPIC_RE = re.compile(r"episode of .+? about: (.+)")


class MockProvider(LLMProvider):
    def __init__(self, model: str = "mock-v1"):
        self.name = "mock"
        self.model = model

    def complete(self, prompt: str, *, system: str, temperature: float, json_output: bool = True) -> str:
        rng = random.Random(prompt)
        if not json_output:
            opener = rng.choice(["Good question.", "Here's the short version.", "Straight answer:"])
            return f"{opener} You asked: {prompt.strip()}"

        match = _TOPIC_RE.search(prompt) or _REPAIR_TOPIC_RE.search(prompt)
        topic = match.group(1).strip() if match else "your credit report"

        hook = rng.choice([
            "Most people get this one backwards.",
            "Your score isn't broken. It's reacting.",
            "This is the part nobody explains.",
            "Here's the quiet rule behind your score.",
        ])
        aha = rng.choice([
            "The bureaus report a snapshot, not your intentions.",
            "Timing moves your score more than effort does.",
            "What you fix matters less than when it gets reported.",
        ])
        emojis = "".join(rng.sample(["💳", "📈", "🧠", "💡", "🔑", "✅"], 3))

        script = "\n".join([
            f"HOST: {hook}",
            f"EXPERT: Let's talk about {topic.lower()}.",
            f"HOST: {aha}",
            "EXPERT: Do one thing today: check when your card actually reports.",
            "HOST: Now you understand the system instead of fearing it.",
            f"HOST: {CTA}",
        ])
        return json.dumps({
            "title": f"{SHOW_NAME}: {topic} {emojis}",
            "hook": hook,
            "script": script,
            "aha_moment": aha,
            "cta": CTA,
            "topic": topic,
        }, ensure_ascii=False)
