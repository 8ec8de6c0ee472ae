"""
Command line helpers for the Credit-Flex Minute service.

Usage:
    flexminute-cli preview --days 7
    flexminute-cli preview --start 2024-03-05 --days 3
    flexminute-cli generate --date 2024-03-05
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import get_settings, validate_settings
from .errors import ConfigurationError, GenerationError
from .generation.pipeline import episode_for_date
from .generation.selector import parse_date_key, today_key, upcoming
from .log import setup_logging
from .providers.registry import get_llm_provider


def _date_key(value: str) -> str:
    try:
        parse_date_key(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")
    return value


def preview(start: str, days: int) -> None:
    """Print the topic, spin and emojis for the next ``days`` dates."""
    for selection in upcoming(start, days):
        print(f"{selection.date_key}  {''.join(selection.emoji_combo):<8}  {selection.topic}")
        print(f"{'':12}spin: {selection.spin}")


def generate(date_key: str) -> int:
    """Run the pipeline once and print the episode JSON."""
    settings = get_settings()
    setup_logging(level=settings.log_level, format="console")
    try:
        validate_settings(settings)
        episode = episode_for_date(
            get_llm_provider(settings=settings),
            date_key,
            show=settings.show_format(),
            extra_instructions=settings.extra_instructions,
            temperature=settings.temperature,
        )
    except (ConfigurationError, GenerationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(episode.model_dump(), ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Credit-Flex Minute episode tools")
    sub = parser.add_subparsers(dest="command", required=True)

    p_preview = sub.add_parser("preview", help="Show upcoming daily selections")
    p_preview.add_argument("--start", type=_date_key, default=None, help="First date (YYYY-MM-DD, default today UTC)")
    p_preview.add_argument("--days", type=int, default=7, help="Number of days to show")

    p_generate = sub.add_parser("generate", help="Generate one episode and print it")
    p_generate.add_argument("--date", type=_date_key, default=None, help="Date key (YYYY-MM-DD, default today UTC)")

    args = parser.parse_args(argv)
    if args.command == "preview":
        preview(args.start or today_key(), args.days)
        return 0
    return generate(args.date or today_key())


if __name__ == "__main__":
    sys.exit(main())
