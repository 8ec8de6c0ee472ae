"""
Celery task definitions for the Credit-Flex Minute service.

The episode used to be produced by a daily cron hitting the HTTP endpoint.
Running it as a Celery beat job keeps the same schedule without an HTTP
round trip; the episode is returned as the task result and lives only in
the result backend.
"""

import os
from typing import Optional

from celery import Celery
from celery.schedules import crontab

from .config import get_settings, validate_settings
from .generation.pipeline import episode_for_date
from .generation.selector import today_key
from .log import get_logger
from .providers.registry import get_llm_provider

# Read broker and backend URLs from environment variables with sensible
# defaults pointing at a local Redis instance.
BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", BROKER_URL)

celery_app = Celery(
    "flexminute_tasks",
    broker=BROKER_URL,
    backend=RESULT_BACKEND,
)
celery_app.conf.timezone = "UTC"

logger = get_logger(__name__)


@celery_app.task(bind=True)
def generate_daily_episode(self, date_key: Optional[str] = None) -> dict:
    """Generate the episode for ``date_key`` (today, UTC, when omitted).

    A failed primary generation call raises and marks the task as failed;
    Celery's own retry options are left off so a bad day is visible.
    """
    settings = get_settings()
    validate_settings(settings)
    date_key = date_key or today_key()
    logger.info("daily_task_started", task_id=getattr(self.request, "id", None), date_key=date_key)

    episode = episode_for_date(
        get_llm_provider(settings=settings),
        date_key,
        show=settings.show_format(),
        extra_instructions=settings.extra_instructions,
        temperature=settings.temperature,
    )
    return episode.model_dump()


@celery_app.on_after_configure.connect
def setup_periodic_tasks(sender, **kwargs) -> None:
    """Schedule the daily episode at the configured UTC time."""
    settings = get_settings()
    sender.add_periodic_task(
        crontab(minute=settings.daily_cron_minute, hour=settings.daily_cron_hour),
        generate_daily_episode.s(),
        name="generate daily credit-flex episode",
    )
