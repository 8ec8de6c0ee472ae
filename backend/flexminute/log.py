"""Structured logging configuration using structlog.

JSON output for deployed environments, coloured console output for local
development.  Secret-looking keys are redacted before rendering so an API
key passed as log context never ends up in the platform's log drain.
"""

from __future__ import annotations

import sys
from typing import Any, Dict

import structlog
from structlog.types import EventDict, WrappedLogger

SECRET_KEYS = frozenset({
    "api_key",
    "apikey",
    "authorization",
    "token",
    "secret",
    "password",
})

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def redact_secrets(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    """Replace values of secret-looking keys with a placeholder."""
    redacted: Dict[str, Any] = {}
    for key, value in event_dict.items():
        redacted[key] = "[REDACTED]" if key.lower() in SECRET_KEYS else value
    return redacted


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per call; test runners and workers swap it out.
    return structlog.PrintLogger(sys.stderr)


def setup_logging(level: str = "INFO", format: str = "json") -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: "json" for production, "console" for development
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]
    if format == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
