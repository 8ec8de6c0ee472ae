"""Deterministic daily content selection.

The same date always picks the same topic, spin and emoji combo, so there is
no need to remember what was published.  Dates are UTC so a scheduled run
and a manual refresh on the same day agree.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from .banks import EMOJI_POOL, SPINS, TOPICS
from .spec import Selection

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
MASK_32 = 0xFFFFFFFF


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 bytes of ``text``."""
    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & MASK_32
    return h


class SplitMix32:
    """Tiny seeded integer generator.

    Stable across Python versions, unlike ``random.Random``, which matters
    because the emoji combo for a date must never change after a deploy.
    """

    GOLDEN_GAMMA = 0x9E3779B9

    def __init__(self, seed: int):
        self._state = seed & MASK_32

    def next_u32(self) -> int:
        self._state = (self._state + self.GOLDEN_GAMMA) & MASK_32
        z = self._state
        z = ((z ^ (z >> 16)) * 0x85EBCA6B) & MASK_32
        z = ((z ^ (z >> 13)) * 0xC2B2AE35) & MASK_32
        return z ^ (z >> 16)

    def randrange(self, n: int) -> int:
        return self.next_u32() % n


def date_key_for(day: date) -> str:
    return day.isoformat()


def parse_date_key(date_key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key, raising ``ValueError`` on anything else."""
    return date.fromisoformat(date_key)


def today_key(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return date_key_for(now.date())


def previous_date_key(date_key: str) -> str:
    return date_key_for(parse_date_key(date_key) - timedelta(days=1))


def pick_index(salt: str, date_key: str, size: int) -> int:
    return fnv1a_32(f"{salt}:{date_key}") % size


def pick_topic(date_key: str) -> str:
    return TOPICS[pick_index("topic", date_key, len(TOPICS))]


def emoji_combo(
    seed: int,
    pool: Sequence[str] = EMOJI_POOL,
    min_count: int = 2,
    max_count: int = 4,
) -> Tuple[str, ...]:
    """Pick between ``min_count`` and ``max_count`` distinct emojis from ``pool``."""
    rng = SplitMix32(seed)
    count = min_count + rng.randrange(max_count - min_count + 1)
    items = list(pool)
    # Fisher-Yates
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return tuple(items[:count])


def select(date_key: str) -> Selection:
    """Return the deterministic selection for ``date_key``."""
    parse_date_key(date_key)
    topic = pick_topic(date_key)
    spin = SPINS[pick_index("spin", date_key, len(SPINS))]
    return Selection(
        date_key=date_key,
        topic=topic,
        spin=spin,
        emoji_combo=emoji_combo(fnv1a_32(f"{date_key}:{topic}")),
        yesterday_topic=pick_topic(previous_date_key(date_key)),
    )


def upcoming(start_key: str, days: int) -> List[Selection]:
    """Selections for ``days`` consecutive dates starting at ``start_key``."""
    start = parse_date_key(start_key)
    return [select(date_key_for(start + timedelta(days=offset))) for offset in range(days)]
