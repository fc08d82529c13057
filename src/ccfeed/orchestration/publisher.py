"""FeedPublisher: runs one fetch -> aggregate -> persist cycle under a deadline."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable

from ccfeed.core.exceptions import CycleFailedError, DeadlineExceededError
from ccfeed.core.protocols import IPersistenceProvider, IPipelineStateSource
from ccfeed.feed.aggregator import FeedAggregator
from ccfeed.models.cycle import CycleReport, CycleStage
from ccfeed.models.feed import Granularity

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedPublisher:
    """Sequence the state source, aggregator and persistence provider.

    A single deadline, started when the cycle starts, covers all three steps.
    The source receives a callable returning the remaining budget so it can
    stop between requests. The budget is checked again before aggregating
    and before persisting; a persist is only started when more than
    ``persist_reserve_seconds`` remain, which defaults to the provider's own
    ``timeout`` (0 for providers without one). Otherwise the previously
    published feed stays as it was. No step is retried.
    """

    def __init__(
        self,
        source: IPipelineStateSource,
        persistence: IPersistenceProvider,
        granularity: Granularity | str = Granularity.STAGE,
        *,
        deadline_seconds: float = 25.0,
        persist_reserve_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._persistence = persistence
        self._aggregator = FeedAggregator(granularity)
        self._deadline_seconds = deadline_seconds
        if persist_reserve_seconds is None:
            persist_reserve_seconds = float(getattr(persistence, "timeout", 0.0))
        self._persist_reserve_seconds = persist_reserve_seconds
        self._clock = clock
        self._now = now

    @property
    def persist_reserve_seconds(self) -> float:
        return self._persist_reserve_seconds

    @property
    def granularity(self) -> Granularity:
        return self._aggregator.granularity

    def _check_deadline(self, deadline: float, stage: CycleStage, reserve: float = 0.0) -> None:
        remaining = deadline - self._clock()
        if remaining <= reserve:
            raise DeadlineExceededError(stage.value, self._deadline_seconds)

    def run_cycle(self) -> CycleReport:
        """Run one cycle and return its report.

        Raises:
            CycleFailedError: a step failed; ``.stage`` names it and
                ``.error`` (also ``__cause__``) is the original exception.
        """
        report = CycleReport(
            granularity=self.granularity,
            target=getattr(self._persistence, "target", ""),
            started_at=self._now(),
        )
        start = self._clock()
        deadline = start + self._deadline_seconds

        try:
            logger.info("Fetching pipeline states")
            snapshots = self._source.fetch_pipeline_states(
                remaining=lambda: deadline - self._clock(),
            )
            report.pipeline_count = len(snapshots)

            report.stage = CycleStage.AGGREGATING
            self._check_deadline(deadline, report.stage)
            projects = self._aggregator.aggregate(snapshots)
            report.project_count = len(projects)
            logger.info(
                "Aggregated %d pipelines into %d projects (%s granularity)",
                report.pipeline_count, report.project_count, self.granularity.value,
            )

            report.stage = CycleStage.PERSISTING
            self._check_deadline(deadline, report.stage, self._persist_reserve_seconds)
            self._persistence.persist_projects(projects)
        except Exception as exc:
            failed_at = report.stage
            report.stage = CycleStage.FAILED
            logger.error("Feed cycle failed while %s: %s", failed_at.value, exc)
            raise CycleFailedError(failed_at.value, exc) from exc

        report.stage = CycleStage.DONE
        report.finished_at = self._now()
        report.duration_ms = int((self._clock() - start) * 1000)
        logger.info("Feed cycle done in %d ms", report.duration_ms)
        return report
