"""Fixed content tables for the show.

These are versioned with the code and never change while the process runs.
Adding a topic or spin reshuffles the daily rotation from the next deploy on.
"""

from __future__ import annotations

SHOW_NAME = "Your Daily Credit-Flex Minute"

CTA = (
    "The free CredFlex app that addresses this is releasing soon. "
    "Comment FIX and I’ll reply with the sign-up link."
)

SPEAKERS = ("HOST", "EXPERT")

DEFAULT_SPEAKER_TONES = {
    "HOST": "emotional, calm authority, no fluff, direct truth",
    "EXPERT": "anonymous, enthusiastic, motivational (Tony/Mel Robbins energy)",
}

TOPICS = (
    "Why paying off a card can drop your score",
    "Utilization: the 30% myth and what actually matters",
    "Statement date vs due date: the hidden score lever",
    "Authorized user: when it helps and when it hurts",
    "Hard vs soft inquiries: what lenders really see",
    "Disputes: why ‘dispute everything’ can backfire",
    "Collections: the difference between paid vs deleted",
    "Charge offs: what changes (and what doesn’t) after payment",
    "Credit mix: why opening the wrong account can hurt",
    "Old accounts: why closing a card can sting later",
    "Debt validation: what it is and what it isn’t",
    "Zombie debts: how they get resurrected",
    "Medical collections: the special rules most people miss",
    "Goodwill letters: how to get a late payment removed",
    "Late payments: why a single 30-day can hurt for years",
    "Utilization per card vs overall utilization",
    "Credit limit increases: when to ask, when not to",
    "Balance transfers: the ‘gotcha’ people don’t expect",
    "Personal loans: why they can help utilization but hurt DTI",
    "Credit builder loans: what they do and don’t do",
    "Secured cards: how to graduate faster",
    "Derogatories: what ‘date of first delinquency’ controls",
    "What ‘verified’ really means in a bureau dispute",
    "CFPB complaints: when they work best",
    "Identity verification: why bureaus stall and how to respond",
    "FCRA basics: the single sentence most people need to know",
    "Debt collectors: what they can’t legally say",
    "Reporting timelines: when updates actually hit your file",
    "Why scores differ (FICO vs Vantage) and why it matters",
    "Rent reporting: when it helps and when it’s noise",
)

SPINS = (
    "Explain it like I’m 12, then give the real reason.",
    "Give a simple rule of thumb, then the exception that surprises people.",
    "Call out the common advice that’s wrong, then replace it with the right move.",
    "Use a short analogy, then the exact step-by-step action.",
    "Focus on what changes in the scoring model vs what changes in reporting.",
    "Contrast what people think happens vs what the bureaus actually do.",
    "Give a quick 'do this today' checklist with 2 items max.",
    "Frame it as 'why the system reacts this way' without sounding conspiratorial.",
)

# Single code points only, so a title's trailing emojis can be counted and
# deduplicated character by character.
EMOJI_POOL = (
    "💳", "📈", "📉", "🧠", "💡", "🔑", "🏦", "📊", "💰",
    "🧾", "✅", "🚀", "🔥", "🎯", "📌", "⚡", "💪", "🛠",
)

TITLE_FALLBACK_EMOJIS = ("💳", "📈", "🧠", "💡", "🔑", "✅", "🎯", "💪")

TITLE_EMOJI_COUNT = 3

assert TOPICS and SPINS and EMOJI_POOL
assert len(set(TITLE_FALLBACK_EMOJIS)) >= TITLE_EMOJI_COUNT
