"""AWS Lambda entry point: publish the feed once per scheduled invocation."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any

from ccfeed.core.config import AppSettings, load_settings
from ccfeed.core.log import configure_logging
from ccfeed.orchestration.publisher import FeedPublisher
from ccfeed.persistence import create_persistence
from ccfeed.sources import create_state_source

logger = logging.getLogger(__name__)


def build_publisher(settings: AppSettings) -> FeedPublisher:
    """Wire a publisher from settings; raises ConfigurationError without a target."""
    return FeedPublisher(
        source=create_state_source(settings),
        persistence=create_persistence(settings),
        granularity=settings.granularity,
        deadline_seconds=settings.deadline_seconds,
        persist_reserve_seconds=settings.persist_reserve_seconds,
    )


@lru_cache(maxsize=1)
def get_publisher() -> FeedPublisher:
    """Build the process-wide publisher on first use (Lambda cold start)."""
    settings = load_settings()
    configure_logging(settings.log_level)
    return build_publisher(settings)


def lambda_handler(event: Any, context: Any) -> dict[str, Any]:
    logger.info("Received event: %s", json.dumps(event, default=str))
    report = get_publisher().run_cycle()
    return report.model_dump(mode="json")
